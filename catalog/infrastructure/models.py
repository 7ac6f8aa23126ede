"""
Software model.
"""
import uuid

from django.db import models


class Software(models.Model):
    """
    A software product in an organization's catalog.
    """

    BILLING_CYCLE_CHOICES = [
        ("MONTHLY", "Monthly"),
        ("YEARLY", "Yearly"),
        ("ONE_TIME", "One time"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey(
        "organizations.Organization", on_delete=models.CASCADE, related_name="software"
    )
    name = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    category = models.CharField(max_length=100, db_index=True)
    vendor = models.CharField(max_length=255, null=True, blank=True)
    cost_per_license = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    billing_cycle = models.CharField(
        max_length=20, choices=BILLING_CYCLE_CHOICES, default="MONTHLY"
    )
    logo_url = models.URLField(max_length=500, null=True, blank=True)
    website_url = models.URLField(max_length=500, null=True, blank=True)
    requires_approval = models.BooleanField(default=True)
    auto_provision = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "software"
        ordering = ["name"]
        verbose_name_plural = "software"
        indexes = [
            models.Index(fields=["organization", "name"]),
            models.Index(fields=["organization", "category"]),
        ]

    def __str__(self):
        return self.name
