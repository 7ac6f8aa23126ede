"""
Django implementation of AccessRequestRepository port.

Decisions run inside ``transaction.atomic`` and re-read the request row
with ``select_for_update`` so two concurrent decisions on the same
request cannot both succeed.
"""
import uuid
from typing import Dict, Iterable, List, Optional, Set, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Case, Count, IntegerField, Value, When

from access_requests.domain.access_request import AccessRequest, Approval
from access_requests.domain.services import ApprovalWorkflow, DecisionOutcome
from access_requests.infrastructure.models import AccessRequest as AccessRequestModel
from access_requests.infrastructure.models import Approval as ApprovalModel
from access_requests.ports.access_request_repository import AccessRequestRepository
from core.domain.exceptions import (
    LicenseAlreadyActiveError,
    RequestAlreadyPendingError,
    RequestNotFoundError,
)
from core.domain.pagination import PageRequest
from core.domain.value_objects import ApprovalDecision, Priority, RequestStatus
from core.infrastructure.database import atomic_async
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.repositories.django_license_repository import (
    license_to_domain,
    save_license_model,
)

PENDING = RequestStatus.PENDING.value

PRIORITY_ORDER = Case(
    *[When(priority=priority.value, then=Value(priority.rank)) for priority in Priority],
    output_field=IntegerField(),
)


class DjangoAccessRequestRepository(AccessRequestRepository):
    """Django ORM implementation of AccessRequestRepository."""

    def _to_domain(self, model: AccessRequestModel) -> AccessRequest:
        """
        Convert Django model to domain entity.

        Args:
            model: Django AccessRequest model

        Returns:
            AccessRequest domain entity
        """
        return AccessRequest(
            id=model.id,
            organization_id=model.organization_id,
            user_id=model.user_id,
            software_id=model.software_id,
            justification=model.justification,
            priority=Priority(model.priority),
            status=RequestStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _approval_to_domain(self, model: ApprovalModel) -> Approval:
        return Approval(
            id=model.id,
            request_id=model.request_id,
            approver_id=model.approver_id,
            status=ApprovalDecision(model.status),
            comments=model.comments,
            created_at=model.created_at,
        )

    def _insert(self, request: AccessRequest) -> AccessRequestModel:
        return AccessRequestModel.objects.create(
            id=request.id,
            organization_id=request.organization_id,
            user_id=request.user_id,
            software_id=request.software_id,
            justification=request.justification,
            priority=request.priority.value,
            status=request.status.value,
            created_at=request.created_at,
        )

    def _insert_approval(self, approval: Approval) -> None:
        ApprovalModel.objects.create(
            id=approval.id,
            request_id=approval.request_id,
            approver_id=approval.approver_id,
            status=approval.status.value,
            comments=approval.comments,
            created_at=approval.created_at,
        )

    def _lock_pending(self, request_id: uuid.UUID, **scope) -> AccessRequestModel:
        model = (
            AccessRequestModel.objects.select_for_update()
            .filter(id=request_id, status=PENDING, **scope)
            .first()
        )
        if model is None:
            raise RequestNotFoundError()
        return model

    def _persist_outcome(self, model: AccessRequestModel, outcome: DecisionOutcome) -> None:
        model.status = outcome.request.status.value
        model.save(update_fields=["status", "updated_at"])
        self._insert_approval(outcome.approval)
        if outcome.license_created:
            try:
                save_license_model(outcome.license)
            except IntegrityError as e:
                raise LicenseAlreadyActiveError() from e

    def _reload(self, model: AccessRequestModel, outcome: DecisionOutcome) -> DecisionOutcome:
        model.refresh_from_db()
        license = outcome.license
        if license is not None:
            license = license_to_domain(LicenseModel.objects.get(id=license.id))
        return DecisionOutcome(
            request=self._to_domain(model),
            approval=outcome.approval,
            license=license,
            license_created=outcome.license_created,
        )

    @sync_to_async
    def create(self, request: AccessRequest) -> AccessRequest:
        """
        Persist a new PENDING request.

        Raises:
            RequestAlreadyPendingError: If the user already has a PENDING
                request for the software
        """
        try:
            with transaction.atomic():
                model = self._insert(request)
        except IntegrityError as e:
            raise RequestAlreadyPendingError() from e
        return self._to_domain(model)

    @atomic_async
    def create_auto_approved(self, request: AccessRequest) -> DecisionOutcome:
        """Persist a new request already approved, its Approval and its license."""
        outcome = ApprovalWorkflow.auto_approve(request)
        model = self._insert(request)
        self._persist_outcome(model, outcome)
        return self._reload(model, outcome)

    @atomic_async
    def record_approval(
        self,
        organization_id: uuid.UUID,
        request_id: uuid.UUID,
        approver_id: uuid.UUID,
        comments: Optional[str] = None,
    ) -> DecisionOutcome:
        """Approve a PENDING request of an organization and grant its license."""
        model = self._lock_pending(request_id, organization_id=organization_id)
        request = self._to_domain(model)

        existing = LicenseModel.objects.filter(
            user_id=request.user_id, software_id=request.software_id, status="ACTIVE"
        ).first()
        outcome = ApprovalWorkflow.approve(
            request,
            approver_id=approver_id,
            comments=comments,
            existing_license=license_to_domain(existing) if existing else None,
        )
        self._persist_outcome(model, outcome)
        return self._reload(model, outcome)

    @atomic_async
    def record_rejection(
        self,
        organization_id: uuid.UUID,
        request_id: uuid.UUID,
        approver_id: uuid.UUID,
        comments: str,
    ) -> DecisionOutcome:
        """Reject a PENDING request of an organization."""
        model = self._lock_pending(request_id, organization_id=organization_id)
        outcome = ApprovalWorkflow.reject(self._to_domain(model), approver_id, comments)
        self._persist_outcome(model, outcome)
        return self._reload(model, outcome)

    @atomic_async
    def cancel(self, user_id: uuid.UUID, request_id: uuid.UUID) -> AccessRequest:
        """Cancel a user's own PENDING request."""
        model = self._lock_pending(request_id, user_id=user_id)
        cancelled = self._to_domain(model).cancel()
        model.status = cancelled.status.value
        model.save(update_fields=["status", "updated_at"])
        return self._to_domain(model)

    @sync_to_async
    def has_pending(self, user_id: uuid.UUID, software_id: uuid.UUID) -> bool:
        """Whether the user has a PENDING request for the product."""
        return AccessRequestModel.objects.filter(
            user_id=user_id, software_id=software_id, status=PENDING
        ).exists()

    @sync_to_async
    def pending_software_ids(
        self, user_id: uuid.UUID, software_ids: Iterable[uuid.UUID]
    ) -> Set[uuid.UUID]:
        """Products among ``software_ids`` the user has a PENDING request for."""
        return set(
            AccessRequestModel.objects.filter(
                user_id=user_id, software_id__in=list(software_ids), status=PENDING
            ).values_list("software_id", flat=True)
        )

    @sync_to_async
    def count_pending_by_software(
        self, software_ids: Iterable[uuid.UUID]
    ) -> Dict[uuid.UUID, int]:
        """Number of PENDING requests per product."""
        ids = list(software_ids)
        counts = {software_id: 0 for software_id in ids}
        rows = (
            AccessRequestModel.objects.filter(software_id__in=ids, status=PENDING)
            .values("software_id")
            .annotate(total=Count("id"))
        )
        for row in rows:
            counts[row["software_id"]] = row["total"]
        return counts

    @sync_to_async
    def list_for_user(
        self,
        user_id: uuid.UUID,
        page: PageRequest,
        status: Optional[RequestStatus] = None,
    ) -> Tuple[List[AccessRequest], int]:
        """A user's requests, newest first."""
        queryset = AccessRequestModel.objects.filter(user_id=user_id)
        if status:
            queryset = queryset.filter(status=status.value)
        total = queryset.count()
        models = queryset.order_by("-created_at")[page.offset : page.offset + page.limit]
        return [self._to_domain(model) for model in models], total

    @sync_to_async
    def list_pending_in_organization(
        self, organization_id: uuid.UUID, page: PageRequest
    ) -> Tuple[List[AccessRequest], int]:
        """PENDING requests ordered URGENT to LOW, then oldest first."""
        queryset = AccessRequestModel.objects.filter(organization_id=organization_id, status=PENDING)
        total = queryset.count()
        models = queryset.annotate(priority_rank=PRIORITY_ORDER).order_by(
            "priority_rank", "created_at"
        )[page.offset : page.offset + page.limit]
        return [self._to_domain(model) for model in models], total

    @sync_to_async
    def approvals_for(
        self, request_ids: Iterable[uuid.UUID]
    ) -> Dict[uuid.UUID, List[Approval]]:
        """Approvals of each request, oldest first."""
        ids = list(request_ids)
        result: Dict[uuid.UUID, List[Approval]] = {request_id: [] for request_id in ids}
        for model in ApprovalModel.objects.filter(request_id__in=ids).order_by("created_at"):
            result[model.request_id].append(self._approval_to_domain(model))
        return result
