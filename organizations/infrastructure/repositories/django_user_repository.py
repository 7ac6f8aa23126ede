"""
Django implementation of UserRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from typing import Dict, Iterable, List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Count, Q

from core.domain.exceptions import EmailInUseError
from core.domain.value_objects import Email, Role
from organizations.domain.user import User
from organizations.infrastructure.models import User as UserModel
from organizations.ports.user_repository import UserRepository


def user_to_domain(model: UserModel) -> User:
    """
    Convert Django model to domain entity.

    Args:
        model: Django User model

    Returns:
        User domain entity
    """
    return User(
        id=model.id,
        organization_id=model.organization_id,
        email=Email(model.email),
        password_hash=model.password_hash,
        first_name=model.first_name,
        last_name=model.last_name,
        role=Role(model.role),
        manager_id=model.manager_id,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class DjangoUserRepository(UserRepository):
    """Django ORM implementation of UserRepository."""

    def _to_domain(self, model: UserModel) -> User:
        return user_to_domain(model)

    def _to_model(self, user: User) -> UserModel:
        """
        Convert domain entity to Django model.

        Args:
            user: User domain entity

        Returns:
            Django User model (unsaved changes applied)
        """
        model, created = UserModel.objects.get_or_create(
            id=user.id,
            defaults={
                "organization_id": user.organization_id,
                "email": str(user.email),
                "password_hash": user.password_hash,
                "first_name": user.first_name,
                "last_name": user.last_name,
                "role": user.role.value,
                "manager_id": user.manager_id,
            },
        )
        if not created:
            model.email = str(user.email)
            model.password_hash = user.password_hash
            model.first_name = user.first_name
            model.last_name = user.last_name
            model.role = user.role.value
            model.manager_id = user.manager_id
        return model

    @sync_to_async
    def save(self, user: User) -> User:
        """
        Save a user entity.

        Args:
            user: User entity to save

        Returns:
            Saved user entity
        """
        try:
            with transaction.atomic():
                model = self._to_model(user)
                model.save()
        except IntegrityError as e:
            raise EmailInUseError() from e
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Find a user by ID in any organization."""
        model = UserModel.objects.filter(id=user_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_in_organization(
        self, organization_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[User]:
        """Find a user by ID within an organization."""
        model = UserModel.objects.filter(id=user_id, organization_id=organization_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by normalized e-mail."""
        model = UserModel.objects.filter(email=email.strip().lower()).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def email_exists(self, email: str, exclude_user_id: Optional[uuid.UUID] = None) -> bool:
        """Check whether an e-mail is taken, optionally ignoring one user."""
        queryset = UserModel.objects.filter(email=email.strip().lower())
        if exclude_user_id:
            queryset = queryset.exclude(id=exclude_user_id)
        return queryset.exists()

    @sync_to_async
    def list(
        self,
        organization_id: uuid.UUID,
        search: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> List[User]:
        """List users of an organization ordered by first name."""
        queryset = UserModel.objects.filter(organization_id=organization_id)
        if search:
            queryset = queryset.filter(
                Q(first_name__icontains=search)
                | Q(last_name__icontains=search)
                | Q(email__icontains=search)
            )
        if role:
            queryset = queryset.filter(role=role.value)
        return [self._to_domain(model) for model in queryset.order_by("first_name", "last_name")]

    @sync_to_async
    def find_by_ids(self, user_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, User]:
        """Batch lookup keyed by user ID."""
        ids = {user_id for user_id in user_ids if user_id}
        if not ids:
            return {}
        return {model.id: self._to_domain(model) for model in UserModel.objects.filter(id__in=ids)}

    @sync_to_async
    def count_managed(self, user_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, int]:
        """Number of users reporting to each of the given users."""
        ids = list(user_ids)
        rows = (
            UserModel.objects.filter(manager_id__in=ids)
            .values("manager_id")
            .annotate(total=Count("id"))
        )
        counts = {user_id: 0 for user_id in ids}
        counts.update({row["manager_id"]: row["total"] for row in rows})
        return counts

    @sync_to_async
    def delete(self, user_id: uuid.UUID) -> None:
        """Delete a user."""
        UserModel.objects.filter(id=user_id).delete()
