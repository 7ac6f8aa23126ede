"""
AccessRequest and Approval models.
"""
import uuid

from django.db import models
from django.db.models import Q


class AccessRequest(models.Model):
    """
    A user's request for a license to a software product.
    """

    PRIORITY_CHOICES = [
        ("LOW", "Low"),
        ("MEDIUM", "Medium"),
        ("HIGH", "High"),
        ("URGENT", "Urgent"),
    ]
    STATUS_CHOICES = [
        ("PENDING", "Pending"),
        ("APPROVED", "Approved"),
        ("REJECTED", "Rejected"),
        ("CANCELLED", "Cancelled"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey(
        "organizations.Organization", on_delete=models.CASCADE, related_name="requests"
    )
    user = models.ForeignKey(
        "organizations.User", on_delete=models.CASCADE, related_name="requests"
    )
    software = models.ForeignKey(
        "catalog.Software", on_delete=models.PROTECT, related_name="requests"
    )
    justification = models.TextField()
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default="MEDIUM")
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="PENDING")
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "requests"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["organization", "status"]),
            models.Index(fields=["user", "status"]),
            models.Index(fields=["software", "status"]),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "software"],
                condition=Q(status="PENDING"),
                name="one_pending_request_per_user_software",
            ),
        ]

    def __str__(self):
        return f"{self.user_id} -> {self.software_id} ({self.status})"


class Approval(models.Model):
    """
    The decision taken on a request.
    """

    STATUS_CHOICES = [
        ("APPROVED", "Approved"),
        ("REJECTED", "Rejected"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    request = models.ForeignKey(AccessRequest, on_delete=models.CASCADE, related_name="approvals")
    approver = models.ForeignKey(
        "organizations.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="approvals",
    )
    status = models.CharField(max_length=10, choices=STATUS_CHOICES)
    comments = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField()

    class Meta:
        db_table = "approvals"
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.request_id} {self.status}"
