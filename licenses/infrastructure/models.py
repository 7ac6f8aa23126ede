"""
License model.
"""
import uuid

from django.db import models
from django.db.models import Q


class License(models.Model):
    """
    A user's right to use one software product.
    A user holds at most one ACTIVE license per product.
    """

    STATUS_CHOICES = [
        ("ACTIVE", "Active"),
        ("SUSPENDED", "Suspended"),
        ("EXPIRED", "Expired"),
        ("REVOKED", "Revoked"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey(
        "organizations.Organization", on_delete=models.CASCADE, related_name="licenses"
    )
    user = models.ForeignKey(
        "organizations.User", on_delete=models.CASCADE, related_name="licenses"
    )
    software = models.ForeignKey(
        "catalog.Software", on_delete=models.PROTECT, related_name="licenses"
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="ACTIVE")
    assigned_at = models.DateTimeField()
    expires_at = models.DateTimeField(null=True, blank=True)
    last_used_at = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-assigned_at"]
        indexes = [
            models.Index(fields=["organization", "status"]),
            models.Index(fields=["user", "status"]),
            models.Index(fields=["software", "status"]),
            models.Index(fields=["status", "expires_at"]),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "software"],
                condition=Q(status="ACTIVE"),
                name="one_active_license_per_user_software",
            ),
        ]

    def __str__(self):
        return f"{self.user_id} - {self.software_id} ({self.status})"
