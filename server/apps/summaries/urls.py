from django.urls import path

from server.apps.summaries import views

app_name = 'summaries'

urlpatterns = [
    path('ai/summarize', views.summarize, name='summarize'),
]
