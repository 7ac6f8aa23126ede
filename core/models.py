"""
Model registration for the core app.
"""
from core.infrastructure.models import AuditLog  # noqa: F401
