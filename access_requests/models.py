"""
Model registration for the access_requests app.
"""
from access_requests.infrastructure.models import AccessRequest, Approval  # noqa: F401
