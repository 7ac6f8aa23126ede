"""
URL configuration for software catalog endpoints.
"""

from django.urls import path

from api.v1.software import views

urlpatterns = [
    path("", views.SoftwareListView.as_view(), name="software-list"),
    path("meta/categories", views.CategoryListView.as_view(), name="software-categories"),
    path("<uuid:software_id>", views.SoftwareDetailView.as_view(), name="software-detail"),
]
