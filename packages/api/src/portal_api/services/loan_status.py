# This project was developed with assistance from AI tools.
"""Inbound LOS status events.

Zapier relays Arive's "Loan Status Updated" / "Loan Date Updated" triggers
to the portal. Each event identifies the application by the
``crmReferenceId`` the bridge sent when the loan was created.
"""

import logging
from datetime import UTC, datetime

from portal_db import Application, ApplicationStatus, LOSPushStatus
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.los import LoanStatusEvent

logger = logging.getLogger(__name__)

# Arive loan stage -> portal application status.
LOS_STAGE_MAP: dict[str, ApplicationStatus] = {
    "APPLICATION_INTAKE": ApplicationStatus.PENDING,
    "QUALIFICATION": ApplicationStatus.IN_REVIEW,
    "PREAPPROVED": ApplicationStatus.APPROVED,
    "LOAN_SETUP": ApplicationStatus.APPROVED,
    "DISCLOSURE_SENT": ApplicationStatus.APPROVED,
    "UNDERWRITING_SUBMITTED": ApplicationStatus.IN_REVIEW,
    "APPROVED_WITH_CONDITION": ApplicationStatus.APPROVED,
    "RE_SUBMITTAL": ApplicationStatus.IN_REVIEW,
    "CLEAR_TO_CLOSE": ApplicationStatus.OFFERS_READY,
    "DOCS_OUT": ApplicationStatus.OFFERS_READY,
    "DOCS_SIGNED": ApplicationStatus.COMPLETED,
    "LOAN_FUNDED": ApplicationStatus.COMPLETED,
    "BROKER_CHECK_RECEIVED": ApplicationStatus.COMPLETED,
    "COMMISSION_PAID": ApplicationStatus.COMPLETED,
    "ADVERSE": ApplicationStatus.DENIED,
    "SUSPENDED": ApplicationStatus.CANCELLED,
}

_KEY_DATE_FIELDS = (
    "initial_le_sent_date",
    "initial_le_signed_date",
    "initial_cd_sent_date",
    "initial_cd_signed_date",
    "intent_to_proceed_date",
    "closing_contingency",
)


def map_los_stage(stage: str | None) -> ApplicationStatus | None:
    """Return the portal status for an Arive stage, or None if unmapped."""
    if not stage:
        return None
    return LOS_STAGE_MAP.get(stage)


async def apply_loan_status_event(
    session: AsyncSession,
    event: LoanStatusEvent,
) -> list[str] | None:
    """Apply an inbound status event to its application.

    Returns the names of the updated columns, or None if the application
    does not exist. A first event for an application whose push was
    recorded as ``sent`` stamps ``los_confirmed_at``; the push status
    itself is never rewritten here.
    """
    app = await session.get(Application, event.crm_reference_id)
    if app is None:
        return None

    updated: list[str] = []
    if event.los_loan_id:
        app.los_loan_id = event.los_loan_id
        updated.append("los_loan_id")
    if event.los_deep_link:
        app.los_deep_link = event.los_deep_link
        updated.append("los_deep_link")

    new_status = map_los_stage(event.loan_status)
    if new_status is not None:
        app.status = new_status
        updated.append("status")

    if app.zapier_push_status == LOSPushStatus.SENT and app.los_confirmed_at is None:
        app.los_confirmed_at = datetime.now(UTC)
        updated.append("los_confirmed_at")

    if updated:
        await session.commit()

    key_dates = {name: getattr(event, name) for name in _KEY_DATE_FIELDS}
    logger.info(
        "LOS status event for application %s: stage=%s status=%s key_dates=%s",
        app.id,
        event.loan_status,
        new_status.value if new_status else None,
        key_dates,
    )
    return updated
