# This project was developed with assistance from AI tools.
"""Admin endpoints for the LOS integration."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from portal_db import Application, get_db
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.los import LOSPushResponse
from ..services.los_bridge import (
    ApplicationNotFoundError,
    LOSBridge,
    LOSDeliveryError,
    get_los_bridge,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/applications/{application_id}/los-push", response_model=LOSPushResponse)
async def push_application(
    application_id: str,
    session: AsyncSession = Depends(get_db),
    bridge: LOSBridge = Depends(get_los_bridge),
) -> LOSPushResponse:
    """Re-send an application to the LOS.

    Each call creates a new loan in the LOS; there is no duplicate check.
    """
    try:
        push_status = await bridge.push(session, application_id)
    except ApplicationNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found",
        ) from exc
    except LOSDeliveryError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="LOS delivery failed; the application is marked as failed.",
        ) from exc

    app = await session.get(Application, application_id)
    return LOSPushResponse(
        application_id=application_id,
        status=push_status,
        pushed_at=app.zapier_pushed_at if app else None,
    )
