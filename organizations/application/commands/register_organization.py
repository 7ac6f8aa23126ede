"""
RegisterOrganizationCommand.

Command to sign up a new organization together with its first admin.
"""
from dataclasses import dataclass


@dataclass
class RegisterOrganizationCommand:
    """Command to register an organization and its admin user."""

    email: str
    password: str
    first_name: str
    last_name: str
    organization_name: str
