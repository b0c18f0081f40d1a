"""
URL configuration for the wildlight project.

The JSON API lives under ``/api/``; uploaded images are served from
``/uploads/``.
"""
from django.urls import include, path, re_path

from gallery import views as gallery_views

urlpatterns = [
    path('api/', include(('gallery.urls', 'gallery'), namespace='gallery')),
    path('api/', include(('studio.urls', 'studio'), namespace='studio')),
    re_path(r'^uploads/(?P<path>.+)$', gallery_views.uploaded_file, name='uploads'),
]
