# This project was developed with assistance from AI tools.
"""Schemas for the LOS (Arive via Zapier) integration.

``LOSPayload`` attributes are snake_case; their aliases are the exact field
names the Arive "Create Loan" action expects and must not change.
"""

from datetime import datetime

from portal_db.enums import LOSPushStatus
from pydantic import BaseModel, ConfigDict, Field

Number = int | float


class LOSPayload(BaseModel):
    """Flat loan record posted to the Zapier Catch Hook."""

    model_config = ConfigDict(populate_by_name=True)

    crm_reference_id: str = Field(alias="crmReferenceId")

    # Loan details
    loan_purpose: str = Field(alias="loanPurpose")
    mortgage_type: str = Field(alias="mortgageType")
    base_loan_amount: Number | None = Field(default=None, alias="baseLoanAmount")
    amortization_type: str = Field(alias="amortizationType")
    amortization_term: int | None = Field(default=None, alias="amortizationTerm")
    loan_term: int | None = Field(default=None, alias="loanTerm")
    down_payment: Number | None = Field(default=None, alias="downPayment")
    purchase_price_or_estimated_value: Number | None = Field(
        default=None, alias="purchasePriceOrEstimatedValue"
    )

    # Subject property
    property_address: str | None = Field(default=None, alias="subjectProperty_addressLineText")
    property_city: str | None = Field(default=None, alias="subjectProperty_city")
    property_state: str | None = Field(default=None, alias="subjectProperty_state")
    property_county: str | None = Field(default=None, alias="subjectProperty_county")
    property_postal_code: str | None = Field(default=None, alias="subjectProperty_postalCode")
    housing_type: str = Field(alias="subjectProperty_housingType")
    property_usage_type: str = Field(alias="subjectProperty_propertyUsageType")
    financed_unit_count: int = Field(default=1, alias="subjectProperty_financedUnitCount")

    # Borrower -- identity fields are filled from the profile at push time
    first_name: str | None = Field(default=None, alias="loanBorrowers_firstName")
    last_name: str | None = Field(default=None, alias="loanBorrowers_lastName")
    email: str | None = Field(default=None, alias="loanBorrowers_emailAddressText")
    mobile_phone: str | None = Field(default=None, alias="loanBorrowers_mobilePhone10digit")
    birth_date: str | None = Field(default=None, alias="loanBorrowers_birthDate")
    day_of_birth: str | None = Field(default=None, alias="loanBorrowers_dayOfBirth")
    month_of_birth: str | None = Field(default=None, alias="loanBorrowers_monthOfBirth")
    marital_status: str = Field(alias="loanBorrowers_maritalStatusType")
    first_time_home_buyer: bool | None = Field(default=None, alias="loanBorrowers_firstTimeHomeBuyer")
    preferred_language: str = Field(default="english", alias="loanBorrowers_preferedLanguages")

    # Borrower current address
    mailing_address: str | None = Field(default=None, alias="loanBorrowers_address_addressLineText")
    mailing_unit: str | None = Field(default=None, alias="loanBorrowers_address_addressUnitIdentifier")
    mailing_city: str | None = Field(default=None, alias="loanBorrowers_address_addressCity")
    mailing_state: str | None = Field(default=None, alias="loanBorrowers_address_addressState")
    mailing_postal_code: str | None = Field(
        default=None, alias="loanBorrowers_address_addressPostalCode"
    )
    address_duration_months: int | None = Field(
        default=None, alias="loanBorrowers_address_durationTermMonths"
    )
    residency_basis: str = Field(alias="loanBorrowers_address_residencyBasisType")

    # Employment
    employer_name: str | None = Field(default=None, alias="employment_employerName")
    employer_position: str | None = Field(default=None, alias="employment_positionDesc")
    employer_phone: str | None = Field(default=None, alias="employment_employerPhone")
    employment_start_date: str | None = Field(default=None, alias="employment_startDate")
    self_employed: bool | None = Field(default=None, alias="employment_selfEmployedInd")
    monthly_income: int | None = Field(default=None, alias="employment_monthlyIncome")
    employment_classification: str = Field(alias="employment_classificationType")

    # Credit
    estimated_fico: int | None = Field(default=None, alias="estimatedFICO")

    # Source tracking
    lead_source: str = Field(alias="leadSource")
    loan_created_from: str = Field(alias="loanCreatedFrom")

    def to_wire(self) -> dict:
        """Serialize with the LOS field names."""
        return self.model_dump(by_alias=True)


class LOSPushResponse(BaseModel):
    """Outcome of a manual push, as returned to admins."""

    application_id: str
    status: LOSPushStatus
    pushed_at: datetime | None = None


class LoanStatusEvent(BaseModel):
    """Inbound LOS event relayed by Zapier (Loan Status / Loan Date Updated)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    crm_reference_id: str | None = Field(default=None, alias="crmReferenceId")
    los_loan_id: str | None = Field(default=None, alias="ariveLoanId")
    los_deep_link: str | None = Field(default=None, alias="ariveDeepLink")
    loan_status: str | None = Field(default=None, alias="currentLoanStatus_status")
    loan_status_date: str | None = Field(default=None, alias="currentLoanStatus_date")
    initial_le_sent_date: str | None = Field(default=None, alias="keyDates_initialLESentDate")
    initial_le_signed_date: str | None = Field(default=None, alias="keyDates_initialLESignedDate")
    initial_cd_sent_date: str | None = Field(default=None, alias="keyDates_initialCDSentDate")
    initial_cd_signed_date: str | None = Field(default=None, alias="keyDates_initialCDSignedDate")
    intent_to_proceed_date: str | None = Field(default=None, alias="keyDates_intentToProceedDate")
    closing_contingency: str | None = Field(default=None, alias="keyDates_closingContingency")


class LoanStatusAck(BaseModel):
    """Acknowledgement returned to Zapier for an inbound status event."""

    success: bool = True
    application_id: str
    updated: list[str] = []
