"""
URL configuration for license endpoints.
"""

from django.urls import path

from api.v1.licenses import views

urlpatterns = [
    path("my-licenses", views.MyLicensesView.as_view(), name="my-licenses"),
    path("all", views.AllLicensesView.as_view(), name="all-licenses"),
    path("stats", views.LicenseStatsView.as_view(), name="license-stats"),
    path(
        "<uuid:license_id>/revoke",
        views.RevokeLicenseView.as_view(),
        name="revoke-license",
    ),
    path(
        "<uuid:license_id>/return",
        views.ReturnLicenseView.as_view(),
        name="return-license",
    ),
    path(
        "<uuid:license_id>/suspend",
        views.SuspendLicenseView.as_view(),
        name="suspend-license",
    ),
    path(
        "<uuid:license_id>/resume",
        views.ResumeLicenseView.as_view(),
        name="resume-license",
    ),
]
