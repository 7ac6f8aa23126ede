"""
Model registration for the organizations app.
"""
from organizations.infrastructure.models import Organization, User  # noqa: F401
