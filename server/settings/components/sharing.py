"""Public share link settings."""

from server.settings.components import config

# Front-end origin; public links look like {SHARE_BASE_URL}/share/{token}
SHARE_BASE_URL = config('SHARE_BASE_URL', default='http://localhost:5173')

SHARE_TOKEN_LENGTH = config('SHARE_TOKEN_LENGTH', cast=int, default=24)
