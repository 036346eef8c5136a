# This project was developed with assistance from AI tools.
"""Borrower-facing application routes."""

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from portal_db import get_db
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.preapproval import PreApprovalRequest, PreApprovalResponse
from ..services.los_bridge import LOSBridge, get_los_bridge
from ..services.preapproval import push_in_background, submit_preapproval

router = APIRouter()


@router.post("/{application_id}/preapproval", response_model=PreApprovalResponse)
async def submit_preapproval_step(
    application_id: str,
    body: PreApprovalRequest,
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_db),
    bridge: LOSBridge = Depends(get_los_bridge),
) -> PreApprovalResponse:
    """Save the pre-approval step, then push the application to the LOS.

    The push runs after the response is sent; its outcome shows up on the
    application's push status.
    """
    app = await submit_preapproval(session, application_id, body)
    if app is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found",
        )

    background_tasks.add_task(push_in_background, bridge, app.id)
    return PreApprovalResponse(application_id=app.id)
