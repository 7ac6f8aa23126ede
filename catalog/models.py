"""
Model registration for the catalog app.
"""
from catalog.infrastructure.models import Software  # noqa: F401
