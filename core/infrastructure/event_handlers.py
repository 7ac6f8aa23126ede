"""
Event handlers for domain events.

These handlers process domain events asynchronously for side effects
like audit logging, notifications, metrics and cache invalidation.
"""

import logging

from asgiref.sync import sync_to_async

from access_requests.domain.events import (
    RequestApproved,
    RequestCancelled,
    RequestRejected,
    RequestSubmitted,
)
from catalog.domain.events import SoftwareCreated, SoftwareDeleted, SoftwareUpdated
from core.domain.events import DomainEvent, EventHandler
from core.metrics import (
    access_requests_decided_total,
    access_requests_submitted_total,
    licenses_granted_total,
    licenses_revoked_total,
    licenses_status_changes_total,
)
from licenses.domain.events import (
    LicenseExpired,
    LicenseGranted,
    LicenseResumed,
    LicenseRevoked,
    LicenseSuspended,
)
from organizations.domain.events import (
    OrganizationRegistered,
    UserCreated,
    UserDeleted,
    UserUpdated,
)

logger = logging.getLogger(__name__)

LICENSE_EVENTS = (LicenseGranted, LicenseRevoked, LicenseSuspended, LicenseResumed, LicenseExpired)
REQUEST_EVENTS = (RequestSubmitted, RequestApproved, RequestRejected, RequestCancelled)
ACCOUNT_EVENTS = (OrganizationRegistered, UserCreated, UserUpdated, UserDeleted)
CATALOG_EVENTS = (SoftwareCreated, SoftwareUpdated, SoftwareDeleted)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes one AuditLog row per domain event.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        from core.infrastructure.models import AuditLog

        await sync_to_async(AuditLog.objects.create)(
            organization_id=event.organization_id,
            entity_type=event.entity_type,
            entity_id=event.aggregate_id,
            action=event.event_type,
            changes=event.payload(),
            actor=event.actor,
        )
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )


class DecisionNotificationHandler(EventHandler):
    """
    Event handler for decision e-mails.

    Queues an e-mail to the requester when a manager or admin approves or
    rejects their request. Automatic approvals send nothing.
    """

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, RequestApproved) and event.automatic:
            return
        from core.tasks import send_request_decision_email

        await sync_to_async(send_request_decision_email.delay)(str(event.request_id))
        logger.debug("Queued decision e-mail for request %s", event.request_id)


class MetricsEventHandler(EventHandler):
    """Event handler that counts business events in Prometheus."""

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, RequestSubmitted):
            access_requests_submitted_total.labels(priority=event.priority).inc()
        elif isinstance(event, RequestApproved):
            outcome = "auto_approved" if event.automatic else "approved"
            access_requests_decided_total.labels(outcome=outcome).inc()
        elif isinstance(event, RequestRejected):
            access_requests_decided_total.labels(outcome="rejected").inc()
        elif isinstance(event, RequestCancelled):
            access_requests_decided_total.labels(outcome="cancelled").inc()
        elif isinstance(event, LicenseGranted):
            licenses_granted_total.labels(source=event.source).inc()
        elif isinstance(event, LicenseRevoked):
            licenses_revoked_total.labels(reason=event.reason).inc()
        elif isinstance(event, LicenseSuspended):
            licenses_status_changes_total.labels(status="SUSPENDED").inc()
        elif isinstance(event, LicenseResumed):
            licenses_status_changes_total.labels(status="ACTIVE").inc()
        elif isinstance(event, LicenseExpired):
            licenses_status_changes_total.labels(status="EXPIRED").inc()


class LicenseStatsCacheInvalidationHandler(EventHandler):
    """
    Event handler for cache invalidation.

    Drops the organization's cached license statistics whenever a license
    or request changes.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for cache invalidation.

        Args:
            event: Domain event
        """
        from licenses.application.services.license_cache_service import (
            LicenseStatsCacheService,
        )

        await LicenseStatsCacheService.invalidate_stats(event.organization_id)


# Register event handlers
def register_event_handlers(bus=None):
    """Register all event handlers with the event bus."""
    if bus is None:
        from core.infrastructure.events import event_bus as bus

    audit_handler = AuditLogEventHandler()
    metrics_handler = MetricsEventHandler()
    cache_handler = LicenseStatsCacheInvalidationHandler()
    notification_handler = DecisionNotificationHandler()

    for event_type in LICENSE_EVENTS + REQUEST_EVENTS + ACCOUNT_EVENTS + CATALOG_EVENTS:
        bus.subscribe(event_type, audit_handler)

    for event_type in LICENSE_EVENTS + REQUEST_EVENTS:
        bus.subscribe(event_type, metrics_handler)
        bus.subscribe(event_type, cache_handler)

    # Product names and deletions show up in the per-software breakdown
    bus.subscribe(SoftwareUpdated, cache_handler)
    bus.subscribe(SoftwareDeleted, cache_handler)
    bus.subscribe(UserDeleted, cache_handler)

    bus.subscribe(RequestApproved, notification_handler)
    bus.subscribe(RequestRejected, notification_handler)

    logger.info("Event handlers registered")
