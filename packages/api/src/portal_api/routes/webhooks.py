# This project was developed with assistance from AI tools.
"""Inbound webhooks from the LOS (relayed by Zapier)."""

import hmac

from fastapi import APIRouter, Depends, Header, HTTPException, status
from portal_db import get_db
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..schemas.los import LoanStatusAck, LoanStatusEvent
from ..services.loan_status import apply_loan_status_event

router = APIRouter()


def verify_webhook_secret(authorization: str | None = Header(default=None)) -> None:
    """Require ``Bearer <ZAPIER_WEBHOOK_SECRET>`` when a secret is configured."""
    secret = settings.ZAPIER_WEBHOOK_SECRET
    if not secret:
        return
    expected = f"Bearer {secret}".encode()
    if not hmac.compare_digest((authorization or "").encode(), expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )


@router.post(
    "/los-status",
    response_model=LoanStatusAck,
    dependencies=[Depends(verify_webhook_secret)],
)
async def los_status(
    event: LoanStatusEvent,
    session: AsyncSession = Depends(get_db),
) -> LoanStatusAck:
    """Apply a loan status / key date update coming from the LOS."""
    if not event.crm_reference_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing crmReferenceId",
        )

    updated = await apply_loan_status_event(session, event)
    if updated is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Application not found: {event.crm_reference_id}",
        )

    return LoanStatusAck(application_id=event.crm_reference_id, updated=updated)
