"""
Pixie Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("settings", views.settings_view),
    path("install/compatibility", views.install_compatibility_view),
    path("install/database", views.install_database_view),
    path("install/admin", views.install_admin_view),
]
