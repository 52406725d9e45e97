from django.urls import path

from server.apps.identity import views

app_name = 'identity'

urlpatterns = [
    path('auth/register', views.register, name='register'),
    path('auth/login', views.login, name='login'),
    path('auth/me', views.me, name='me'),
]
