"""Studio (admin) URL configuration."""
from django.urls import path

from . import views

app_name = 'studio'

urlpatterns = [
    path('me', views.me_api, name='me'),
    path('login', views.login_api, name='login'),
    path('logout', views.logout_api, name='logout'),
    path('profile', views.profile_api, name='profile'),
    path('print-requests', views.print_requests_api, name='print_requests'),
]
