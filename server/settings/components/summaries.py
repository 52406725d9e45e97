"""AI summarization settings (Google Gemini)."""

from server.settings.components import config

# Empty key means summaries fall back to a labeled mock
GEMINI_API_KEY = config('GEMINI_API_KEY', default='')
GEMINI_MODEL = config('GEMINI_MODEL', default='gemini-2.5-flash')
GEMINI_API_URL = config(
    'GEMINI_API_URL',
    default='https://generativelanguage.googleapis.com/v1beta',
)
GEMINI_TIMEOUT = config('GEMINI_TIMEOUT', cast=float, default=20.0)
