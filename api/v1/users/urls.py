"""
URL configuration for user administration endpoints.
"""

from django.urls import path

from api.v1.users import views

urlpatterns = [
    path("", views.UserListView.as_view(), name="user-list"),
    path("<uuid:user_id>", views.UserDetailView.as_view(), name="user-detail"),
    path(
        "<uuid:user_id>/licenses",
        views.UserLicenseListView.as_view(),
        name="user-licenses",
    ),
    path(
        "<uuid:user_id>/licenses/<uuid:license_id>",
        views.UserLicenseDetailView.as_view(),
        name="user-license-detail",
    ),
]
