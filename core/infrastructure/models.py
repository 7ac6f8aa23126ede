"""
AuditLog model.
"""
import uuid

from django.db import models


class AuditLog(models.Model):
    """
    Append-only record of a change made inside an organization.
    Written by the audit event handler for every domain event.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey(
        "organizations.Organization", on_delete=models.CASCADE, related_name="audit_logs"
    )
    entity_type = models.CharField(max_length=50)
    entity_id = models.CharField(max_length=100)
    action = models.CharField(max_length=100)
    changes = models.JSONField(default=dict, blank=True)
    actor = models.CharField(max_length=100, help_text="User ID or 'system'")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "audit_logs"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["organization", "created_at"]),
            models.Index(fields=["entity_type", "entity_id"]),
        ]

    def __str__(self):
        return f"{self.action} {self.entity_type}:{self.entity_id}"
