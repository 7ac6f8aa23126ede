"""
Celery tasks for background processing.

Tasks for license expiry and decision notifications.
"""
import logging
import uuid

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.mail import send_mail

from omnisme.celery import app

logger = logging.getLogger(__name__)


@app.task
def expire_licenses(dry_run: bool = False) -> dict:
    """
    Mark ACTIVE licenses past their expiry date as EXPIRED.

    Scheduled daily by Celery beat.

    Returns:
        Dict with ``found`` and ``expired`` counts
    """
    from licenses.application.commands.expire_licenses import ExpireLicensesCommand
    from licenses.application.handlers.expire_licenses_handler import ExpireLicensesHandler
    from licenses.infrastructure.repositories.django_license_repository import (
        DjangoLicenseRepository,
    )

    handler = ExpireLicensesHandler(DjangoLicenseRepository())
    result = async_to_sync(handler.handle)(ExpireLicensesCommand(dry_run=dry_run))
    return {"found": result.found, "expired": result.expired}


@app.task(bind=True, max_retries=3)
def send_request_decision_email(self, request_id: str) -> bool:
    """
    Tell a requester that their request was approved or rejected.

    Args:
        request_id: AccessRequest UUID

    Returns:
        True if an e-mail was sent
    """
    from access_requests.infrastructure.models import AccessRequest

    request = (
        AccessRequest.objects.select_related("user", "software")
        .filter(id=uuid.UUID(request_id))
        .first()
    )
    if request is None:
        logger.warning("Request %s not found for notification", request_id)
        return False

    approval = request.approvals.order_by("-created_at").first()
    decision = request.status.lower()
    lines = [
        f"Hello {request.user.first_name},",
        "",
        f"Your request for {request.software.name} was {decision}.",
    ]
    if approval is not None and approval.comments:
        lines += ["", f"Comments: {approval.comments}"]
    lines += ["", f"View your licenses at {settings.FRONTEND_URL}"]

    try:
        send_mail(
            subject=f"Your {request.software.name} request was {decision}",
            message="\n".join(lines),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[request.user.email],
        )
    except OSError as exc:
        logger.error("Decision e-mail failed: %s", exc, exc_info=True)
        raise self.retry(exc=exc, countdown=2 ** self.request.retries)

    logger.info("Decision e-mail sent", extra={"request_id": request_id})
    return True
