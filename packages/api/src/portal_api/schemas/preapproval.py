# This project was developed with assistance from AI tools.
"""Pre-approval step request/response schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class PreApprovalRequest(BaseModel):
    """Fields collected by the wizard's pre-approval step."""

    # Borrower details
    date_of_birth: datetime | None = None
    marital_status: str | None = None
    first_time_home_buyer: bool | None = None
    preferred_language: str | None = None

    # Current residence
    mailing_address: str | None = None
    mailing_unit: str | None = None
    mailing_city: str | None = None
    mailing_state: str | None = None
    mailing_zip_code: str | None = None
    address_duration_months: int | None = Field(default=None, ge=0)
    housing_status: str | None = None

    # Employment
    employer_name: str | None = None
    employer_position: str | None = None
    employer_phone: str | None = None
    employment_start_date: datetime | None = None
    self_employed: bool | None = None

    # Loan preferences
    down_payment: Decimal | None = Field(default=None, ge=0)
    mortgage_type: str | None = None
    loan_term: int | None = Field(default=None, ge=1)
    amortization_type: str | None = None
    number_of_units: int | None = Field(default=None, ge=1)

    # Co-borrower
    has_co_borrower: bool | None = None
    co_borrower_first_name: str | None = None
    co_borrower_last_name: str | None = None
    co_borrower_email: str | None = None
    co_borrower_phone: str | None = None
    co_borrower_dob: datetime | None = None


class PreApprovalResponse(BaseModel):
    success: bool = True
    message: str = "Pre-approval submitted successfully"
    application_id: str
