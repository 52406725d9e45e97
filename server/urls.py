"""Main URL mapping configuration file.

All REST endpoints live under /api/; each app owns its URLConf.
"""

from django.contrib import admin
from django.http import HttpRequest, JsonResponse
from django.urls import include, path

from server.apps.files import urls as files_urls
from server.apps.identity import urls as identity_urls
from server.apps.summaries import urls as summaries_urls


def health(request: HttpRequest) -> JsonResponse:
    """Liveness probe."""
    return JsonResponse({'status': 'running'})


urlpatterns = [
    # Apps:
    path('api/', include(identity_urls, namespace='identity')),
    path('api/', include(files_urls, namespace='files')),
    path('api/', include(summaries_urls, namespace='summaries')),

    # django-admin:
    path('admin/', admin.site.urls),

    path('health/', health, name='health'),
]
