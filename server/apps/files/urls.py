from django.urls import path

from server.apps.files import views

app_name = 'files'

urlpatterns = [
    # File registry
    path('files', views.file_list, name='file_list'),
    path('files/shared', views.shared_file_list, name='shared_file_list'),
    path(
        'files/generate-upload-url',
        views.generate_upload_url,
        name='generate_upload_url',
    ),
    path(
        'files/finalize-upload',
        views.finalize_upload,
        name='finalize_upload',
    ),
    path(
        'files/download/<uuid:file_id>',
        views.download_url,
        name='download_url',
    ),
    path('files/<uuid:file_id>', views.file_detail, name='file_detail'),

    # Sharing
    path(
        'sharing/public/<str:share_token>',
        views.public_file,
        name='public_file',
    ),
    path('sharing/<uuid:file_id>', views.sharing_info, name='sharing_info'),
    path(
        'sharing/<uuid:file_id>/public',
        views.public_toggle,
        name='public_toggle',
    ),
    path(
        'sharing/<uuid:file_id>/collaborators',
        views.collaborator_list,
        name='collaborator_list',
    ),
    path(
        'sharing/<uuid:file_id>/collaborators/<int:user_id>',
        views.collaborator_detail,
        name='collaborator_detail',
    ),
]
