# This project was developed with assistance from AI tools.
"""
Domain enums for the portal's loan applications.

Shared by the SQLAlchemy models (portal_db) and the Pydantic schemas
(portal_api).
"""

import enum


class ApplicationStatus(str, enum.Enum):
    PENDING = "pending"
    IN_REVIEW = "in_review"
    APPROVED = "approved"
    OFFERS_READY = "offers_ready"
    COMPLETED = "completed"
    DENIED = "denied"
    CANCELLED = "cancelled"


class LOSPushStatus(str, enum.Enum):
    """Outcome of the last attempt to deliver an application to the LOS."""

    SENT = "sent"
    FAILED = "failed"
