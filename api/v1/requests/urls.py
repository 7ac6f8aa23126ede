"""
URL configuration for access request endpoints.
"""

from django.urls import path

from api.v1.requests import views

urlpatterns = [
    path("", views.SubmitRequestView.as_view(), name="submit-request"),
    path("my-requests", views.MyRequestsView.as_view(), name="my-requests"),
    path("pending-approvals", views.PendingApprovalsView.as_view(), name="pending-approvals"),
    path(
        "<uuid:request_id>/approve",
        views.ApproveRequestView.as_view(),
        name="approve-request",
    ),
    path(
        "<uuid:request_id>/reject",
        views.RejectRequestView.as_view(),
        name="reject-request",
    ),
    path(
        "<uuid:request_id>/cancel",
        views.CancelRequestView.as_view(),
        name="cancel-request",
    ),
]
