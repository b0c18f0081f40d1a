"""Gallery app URL configuration."""
from django.urls import path

from . import views

app_name = 'gallery'

urlpatterns = [
    path('seasons', views.seasons_api, name='seasons'),
    path('photos', views.photos_api, name='photos'),
    path('photos/<str:photo_id>', views.photo_api, name='photo'),
    path('photos/<str:photo_id>/like', views.like_api, name='like'),
    path('photos/<str:photo_id>/request-print', views.request_print_api, name='request_print'),
]
