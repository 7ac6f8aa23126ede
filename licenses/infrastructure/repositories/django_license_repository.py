"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Count

from core.domain.exceptions import InvalidLicenseStatusError, LicenseAlreadyActiveError
from core.domain.pagination import PageRequest
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository

ACTIVE = LicenseStatus.ACTIVE.value


def license_to_domain(model: LicenseModel) -> License:
    """
    Convert Django model to domain entity.

    Args:
        model: Django License model

    Returns:
        License domain entity
    """
    return License(
        id=model.id,
        organization_id=model.organization_id,
        user_id=model.user_id,
        software_id=model.software_id,
        status=LicenseStatus(model.status),
        assigned_at=model.assigned_at,
        expires_at=model.expires_at,
        last_used_at=model.last_used_at,
        notes=model.notes,
        updated_at=model.updated_at,
    )


def save_license_model(license: License) -> LicenseModel:
    """
    Insert or update the row for a license entity.

    An update only applies while the stored status is one the license can
    have moved out of, so a stale copy never overwrites a newer transition.

    Must be called from synchronous code; callers that need the write to
    join a larger transaction call this inside their own atomic block.

    Raises:
        InvalidLicenseStatusError: If the stored status changed meanwhile
    """
    model, created = LicenseModel.objects.get_or_create(
        id=license.id,
        defaults={
            "organization_id": license.organization_id,
            "user_id": license.user_id,
            "software_id": license.software_id,
            "status": license.status.value,
            "assigned_at": license.assigned_at,
            "expires_at": license.expires_at,
            "last_used_at": license.last_used_at,
            "notes": license.notes,
        },
    )
    if created:
        return model

    updated = LicenseModel.objects.filter(
        id=license.id,
        status__in=[status.value for status in license.previous_statuses],
    ).update(
        status=license.status.value,
        expires_at=license.expires_at,
        last_used_at=license.last_used_at,
        notes=license.notes,
        updated_at=license.updated_at,
    )
    if not updated:
        raise InvalidLicenseStatusError("License status changed before the update was saved")
    model.refresh_from_db()
    return model


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel) -> License:
        return license_to_domain(model)

    @sync_to_async
    def save(self, license: License) -> License:
        """
        Save a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity

        Raises:
            LicenseAlreadyActiveError: If the holder already has an ACTIVE
                license for the product
            InvalidLicenseStatusError: If the stored status changed since the
                license was read
        """
        try:
            with transaction.atomic():
                model = save_license_model(license)
        except IntegrityError as e:
            raise LicenseAlreadyActiveError(
                "User already has an active license for this software"
            ) from e
        return self._to_domain(model)

    @sync_to_async
    def find_in_organization(
        self, organization_id: uuid.UUID, license_id: uuid.UUID
    ) -> Optional[License]:
        """Find a license by ID within an organization."""
        model = LicenseModel.objects.filter(
            id=license_id, organization_id=organization_id
        ).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_active(self, user_id: uuid.UUID, software_id: uuid.UUID) -> Optional[License]:
        """The user's ACTIVE license for a product, if any."""
        model = LicenseModel.objects.filter(
            user_id=user_id, software_id=software_id, status=ACTIVE
        ).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def current_for_user(
        self, user_id: uuid.UUID, software_ids: Iterable[uuid.UUID]
    ) -> Dict[uuid.UUID, License]:
        """The ACTIVE, else most recent, license of a user for each product."""
        ids = set(software_ids)
        if not ids:
            return {}
        current: Dict[uuid.UUID, License] = {}
        models = LicenseModel.objects.filter(user_id=user_id, software_id__in=ids).order_by(
            "-assigned_at"
        )
        for model in models:
            existing = current.get(model.software_id)
            if existing is None or (model.status == ACTIVE and not existing.is_active):
                current[model.software_id] = self._to_domain(model)
        return current

    @sync_to_async
    def list_for_user(
        self,
        user_id: uuid.UUID,
        page: Optional[PageRequest] = None,
        status: Optional[LicenseStatus] = None,
    ) -> Tuple[List[License], int]:
        """A user's licenses, newest assignment first."""
        queryset = LicenseModel.objects.filter(user_id=user_id)
        if status:
            queryset = queryset.filter(status=status.value)
        total = queryset.count()
        queryset = queryset.order_by("-assigned_at")
        if page:
            queryset = queryset[page.offset : page.offset + page.limit]
        return [self._to_domain(model) for model in queryset], total

    @sync_to_async
    def list_active_for_users(
        self, user_ids: Iterable[uuid.UUID]
    ) -> Dict[uuid.UUID, List[License]]:
        """ACTIVE licenses of each user, newest first."""
        ids = list(user_ids)
        result: Dict[uuid.UUID, List[License]] = {user_id: [] for user_id in ids}
        models = LicenseModel.objects.filter(user_id__in=ids, status=ACTIVE).order_by(
            "-assigned_at"
        )
        for model in models:
            result[model.user_id].append(self._to_domain(model))
        return result

    @sync_to_async
    def list_for_organization(
        self,
        organization_id: uuid.UUID,
        page: PageRequest,
        user_id: Optional[uuid.UUID] = None,
        software_id: Optional[uuid.UUID] = None,
        status: Optional[LicenseStatus] = None,
    ) -> Tuple[List[License], int]:
        """Every license of an organization, newest assignment first, with filters."""
        queryset = LicenseModel.objects.filter(organization_id=organization_id)
        if user_id:
            queryset = queryset.filter(user_id=user_id)
        if software_id:
            queryset = queryset.filter(software_id=software_id)
        if status:
            queryset = queryset.filter(status=status.value)
        total = queryset.count()
        models = queryset.order_by("-assigned_at")[page.offset : page.offset + page.limit]
        return [self._to_domain(model) for model in models], total

    @sync_to_async
    def list_active_in_organization(self, organization_id: uuid.UUID) -> List[License]:
        """All ACTIVE licenses of an organization."""
        models = LicenseModel.objects.filter(organization_id=organization_id, status=ACTIVE)
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def recent_in_organization(
        self, organization_id: uuid.UUID, limit: int = 10
    ) -> List[License]:
        """Most recently assigned licenses of an organization."""
        models = LicenseModel.objects.filter(organization_id=organization_id).order_by(
            "-assigned_at"
        )[:limit]
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def count_in_organization(self, organization_id: uuid.UUID) -> Tuple[int, int]:
        """Tuple of (all licenses, ACTIVE licenses) of an organization."""
        queryset = LicenseModel.objects.filter(organization_id=organization_id)
        return queryset.count(), queryset.filter(status=ACTIVE).count()

    @sync_to_async
    def count_by_software(
        self, software_ids: Iterable[uuid.UUID], active_only: bool = False
    ) -> Dict[uuid.UUID, int]:
        """Number of licenses per product."""
        ids = list(software_ids)
        queryset = LicenseModel.objects.filter(software_id__in=ids)
        if active_only:
            queryset = queryset.filter(status=ACTIVE)
        counts = {software_id: 0 for software_id in ids}
        for row in queryset.values("software_id").annotate(total=Count("id")):
            counts[row["software_id"]] = row["total"]
        return counts

    @sync_to_async
    def count_active_by_user(self, user_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, int]:
        """Number of ACTIVE licenses per user."""
        ids = list(user_ids)
        counts = {user_id: 0 for user_id in ids}
        rows = (
            LicenseModel.objects.filter(user_id__in=ids, status=ACTIVE)
            .values("user_id")
            .annotate(total=Count("id"))
        )
        for row in rows:
            counts[row["user_id"]] = row["total"]
        return counts

    @sync_to_async
    def find_active_past_expiry(self, current_time: datetime) -> List[License]:
        """ACTIVE licenses whose ``expires_at`` is before ``current_time``."""
        models = LicenseModel.objects.filter(status=ACTIVE, expires_at__lt=current_time)
        return [self._to_domain(model) for model in models]
