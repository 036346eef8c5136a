# This project was developed with assistance from AI tools.
"""Pre-approval submission service.

Stores the pre-approval step on the application and hands it to the LOS
bridge. The push runs after the HTTP response, so it gets its own session.
"""

import logging
from datetime import UTC, datetime

from portal_db import Application, SessionLocal
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.preapproval import PreApprovalRequest
from .los_bridge import ApplicationNotFoundError, LOSBridge, LOSDeliveryError

logger = logging.getLogger(__name__)


async def submit_preapproval(
    session: AsyncSession,
    application_id: str,
    data: PreApprovalRequest,
) -> Application | None:
    """Apply the pre-approval fields. Returns None if the application is unknown.

    Blank strings are stored as NULL so the LOS mapping sees them as absent.
    """
    app = await session.get(Application, application_id)
    if app is None:
        return None

    for field, value in data.model_dump().items():
        if isinstance(value, str):
            value = value.strip() or None
        setattr(app, field, value)

    app.pre_approval_complete = True
    app.pre_approval_submitted_at = datetime.now(UTC)

    await session.commit()
    await session.refresh(app)
    logger.info("Pre-approval submitted for application %s", application_id)
    return app


async def push_in_background(bridge: LOSBridge, application_id: str) -> None:
    """Push an application outside the request; failures are logged only.

    The outcome is already recorded on the application by the bridge.
    """
    async with SessionLocal() as session:
        try:
            await bridge.push(session, application_id)
        except (ApplicationNotFoundError, LOSDeliveryError):
            logger.exception("Background LOS push failed for application %s", application_id)
