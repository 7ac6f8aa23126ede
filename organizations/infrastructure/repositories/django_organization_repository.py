"""
Django implementation of OrganizationRepository port.
"""
import uuid
from typing import Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError

from core.domain.exceptions import UserAlreadyExistsError
from core.infrastructure.database import atomic_async
from organizations.domain.organization import Organization
from organizations.domain.user import User
from organizations.infrastructure.models import Organization as OrganizationModel
from organizations.infrastructure.models import User as UserModel
from organizations.infrastructure.repositories.django_user_repository import user_to_domain
from organizations.ports.organization_repository import OrganizationRepository


def organization_to_domain(model: OrganizationModel) -> Organization:
    """Convert Django model to domain entity."""
    return Organization(
        id=model.id,
        name=model.name,
        domain=model.domain,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class DjangoOrganizationRepository(OrganizationRepository):
    """Django ORM implementation of OrganizationRepository."""

    @sync_to_async
    def find_by_id(self, organization_id: uuid.UUID) -> Optional[Organization]:
        """Find an organization by ID."""
        model = OrganizationModel.objects.filter(id=organization_id).first()
        return organization_to_domain(model) if model else None

    @atomic_async
    def create_with_admin(
        self, organization: Organization, admin: User
    ) -> Tuple[Organization, User]:
        """Persist a new organization and its first admin in one transaction."""
        if UserModel.objects.filter(email=str(admin.email)).exists():
            raise UserAlreadyExistsError()

        org_model = OrganizationModel.objects.create(
            id=organization.id,
            name=organization.name,
            domain=organization.domain,
        )
        try:
            user_model = UserModel.objects.create(
                id=admin.id,
                organization=org_model,
                email=str(admin.email),
                password_hash=admin.password_hash,
                first_name=admin.first_name,
                last_name=admin.last_name,
                role=admin.role.value,
            )
        except IntegrityError as e:
            raise UserAlreadyExistsError() from e

        return organization_to_domain(org_model), user_to_domain(user_model)
