# This project was developed with assistance from AI tools.
"""
Lumina portal -- domain models

Loan applications captured by the apply wizard and the borrower profiles
that own them.
"""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)

from .database import Base
from .enums import ApplicationStatus, LOSPushStatus


def _new_id() -> str:
    return str(uuid.uuid4())


class Profile(Base):
    """Borrower identity record, keyed by the auth provider's user id."""

    __tablename__ = "profiles"

    id = Column(String(255), primary_key=True)
    full_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    phone = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Profile(id={self.id}, name='{self.full_name}')>"


class Application(Base):
    """Mortgage loan application."""

    __tablename__ = "applications"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(255), ForeignKey("profiles.id"), nullable=True, index=True)
    new_user_id = Column(String(255), ForeignKey("profiles.id"), nullable=True, index=True)
    status = Column(
        Enum(ApplicationStatus, name="application_status", native_enum=False),
        nullable=False,
        default=ApplicationStatus.PENDING,
    )

    # Loan terms
    product_type = Column(String(50), nullable=True)
    mortgage_type = Column(String(50), nullable=True)
    loan_amount = Column(Numeric(12, 2), nullable=True)
    loan_term = Column(Integer, nullable=True)
    amortization_type = Column(String(50), nullable=True)
    down_payment = Column(Numeric(12, 2), nullable=True)
    property_value = Column(Numeric(12, 2), nullable=True)

    # Subject property
    property_address = Column(Text, nullable=True)
    property_city = Column(String(100), nullable=True)
    property_state = Column(String(50), nullable=True)
    property_county = Column(String(100), nullable=True)
    zip_code = Column(String(20), nullable=True)
    property_type = Column(String(50), nullable=True)
    property_usage = Column(String(50), nullable=True)
    number_of_units = Column(Integer, nullable=True)

    # Borrower
    date_of_birth = Column(DateTime(timezone=True), nullable=True)
    marital_status = Column(String(50), nullable=True)
    first_time_home_buyer = Column(Boolean, nullable=True)
    preferred_language = Column(String(50), nullable=True)

    # Current residence
    mailing_address = Column(Text, nullable=True)
    mailing_unit = Column(String(50), nullable=True)
    mailing_city = Column(String(100), nullable=True)
    mailing_state = Column(String(50), nullable=True)
    mailing_zip_code = Column(String(20), nullable=True)
    address_duration_months = Column(Integer, nullable=True)
    housing_status = Column(String(50), nullable=True)

    # Employment
    employment_status = Column(String(50), nullable=True)
    employer_name = Column(String(255), nullable=True)
    employer_position = Column(String(255), nullable=True)
    employer_phone = Column(String(50), nullable=True)
    employment_start_date = Column(DateTime(timezone=True), nullable=True)
    self_employed = Column(Boolean, nullable=True)
    annual_income = Column(Numeric(12, 2), nullable=True)
    credit_score = Column(Integer, nullable=True)

    # Co-borrower
    has_co_borrower = Column(Boolean, nullable=True)
    co_borrower_first_name = Column(String(100), nullable=True)
    co_borrower_last_name = Column(String(100), nullable=True)
    co_borrower_email = Column(String(255), nullable=True)
    co_borrower_phone = Column(String(50), nullable=True)
    co_borrower_dob = Column(DateTime(timezone=True), nullable=True)

    # Pre-approval step
    pre_approval_complete = Column(Boolean, nullable=False, default=False)
    pre_approval_submitted_at = Column(DateTime(timezone=True), nullable=True)

    # LOS integration
    zapier_push_status = Column(
        Enum(LOSPushStatus, name="los_push_status", native_enum=False),
        nullable=True,
    )
    zapier_pushed_at = Column(DateTime(timezone=True), nullable=True)
    los_loan_id = Column(String(255), nullable=True)
    los_deep_link = Column(Text, nullable=True)
    los_confirmed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Application(id={self.id}, status='{self.status}')>"
