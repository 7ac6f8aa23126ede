"""
Django implementation of SoftwareRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from typing import Dict, Iterable, List, Optional, Tuple

from asgiref.sync import sync_to_async
from django.db.models import Q

from catalog.domain.software import EDITABLE_FIELDS, Software
from catalog.infrastructure.models import Software as SoftwareModel
from catalog.ports.software_repository import SoftwareRepository
from core.domain.pagination import PageRequest
from core.domain.value_objects import BillingCycle


def software_to_domain(model: SoftwareModel) -> Software:
    """
    Convert Django model to domain entity.

    Args:
        model: Django Software model

    Returns:
        Software domain entity
    """
    return Software(
        id=model.id,
        organization_id=model.organization_id,
        name=model.name,
        description=model.description,
        category=model.category,
        vendor=model.vendor,
        cost_per_license=model.cost_per_license,
        billing_cycle=BillingCycle(model.billing_cycle),
        logo_url=model.logo_url,
        website_url=model.website_url,
        requires_approval=model.requires_approval,
        auto_provision=model.auto_provision,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class DjangoSoftwareRepository(SoftwareRepository):
    """Django ORM implementation of SoftwareRepository."""

    def _to_domain(self, model: SoftwareModel) -> Software:
        return software_to_domain(model)

    def _to_model(self, software: Software) -> SoftwareModel:
        """Convert domain entity to Django model."""
        values = {name: getattr(software, name) for name in EDITABLE_FIELDS}
        values["billing_cycle"] = software.billing_cycle.value
        model, created = SoftwareModel.objects.get_or_create(
            id=software.id,
            defaults=dict(values, organization_id=software.organization_id),
        )
        if not created:
            for name, value in values.items():
                setattr(model, name, value)
        return model

    @sync_to_async
    def save(self, software: Software) -> Software:
        """
        Save a software entity.

        Args:
            software: Software entity to save

        Returns:
            Saved software entity
        """
        model = self._to_model(software)
        model.save()
        model.refresh_from_db()
        return self._to_domain(model)

    @sync_to_async
    def find_in_organization(
        self, organization_id: uuid.UUID, software_id: uuid.UUID
    ) -> Optional[Software]:
        """Find a product by ID within an organization."""
        model = SoftwareModel.objects.filter(
            id=software_id, organization_id=organization_id
        ).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_ids(self, software_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, Software]:
        """Batch lookup keyed by software ID."""
        ids = set(software_ids)
        if not ids:
            return {}
        return {
            model.id: self._to_domain(model) for model in SoftwareModel.objects.filter(id__in=ids)
        }

    @sync_to_async
    def list(
        self,
        organization_id: uuid.UUID,
        page: PageRequest,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Tuple[List[Software], int]:
        """List an organization's catalog ordered by name."""
        queryset = SoftwareModel.objects.filter(organization_id=organization_id)
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search)
                | Q(description__icontains=search)
                | Q(vendor__icontains=search)
            )
        if category:
            queryset = queryset.filter(category=category)

        total = queryset.count()
        models = queryset.order_by("name")[page.offset : page.offset + page.limit]
        return [self._to_domain(model) for model in models], total

    @sync_to_async
    def categories(self, organization_id: uuid.UUID) -> List[str]:
        """Distinct categories of an organization, sorted ascending."""
        return list(
            SoftwareModel.objects.filter(organization_id=organization_id)
            .order_by("category")
            .values_list("category", flat=True)
            .distinct()
        )

    @sync_to_async
    def is_referenced(self, software_id: uuid.UUID) -> bool:
        """Whether any license or request points at the product."""
        from access_requests.infrastructure.models import AccessRequest as AccessRequestModel
        from licenses.infrastructure.models import License as LicenseModel

        return (
            LicenseModel.objects.filter(software_id=software_id).exists()
            or AccessRequestModel.objects.filter(software_id=software_id).exists()
        )

    @sync_to_async
    def delete(self, software_id: uuid.UUID) -> None:
        """Delete a product."""
        SoftwareModel.objects.filter(id=software_id).delete()
