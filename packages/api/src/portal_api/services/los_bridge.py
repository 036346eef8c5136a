# This project was developed with assistance from AI tools.
"""Application → LOS bridge (Arive via a Zapier Catch Hook).

Maps a portal application onto Arive's flat "Create Loan" field schema,
posts it to the configured Zapier webhook and records the outcome on the
application (``zapier_push_status`` + ``zapier_pushed_at``, always written
together).

The mapping half is pure and total: unknown or missing values fall back to
a fixed default and nothing in it raises. The delivery half does no retries
and has no dedup key -- pushing the same application twice creates two
loans in the LOS, so callers serialize re-pushes themselves.
"""

import logging
import math
from datetime import UTC, date, datetime
from typing import Any

import httpx
from fastapi import Request
from portal_db import Application, LOSPushStatus, Profile
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.los import LOSPayload

logger = logging.getLogger(__name__)

LEAD_SOURCE = "Lumina Platform"
LOAN_CREATED_FROM = "POS"
DEFAULT_LANGUAGE = "english"


class ApplicationNotFoundError(LookupError):
    """Raised when the application to push does not exist."""

    pass


class LOSDeliveryError(RuntimeError):
    """Raised after a failed webhook delivery has been recorded."""

    pass


# ---------------------------------------------------------------------------
# Field mapping (portal vocabulary -> Arive vocabulary)
# ---------------------------------------------------------------------------

_LOAN_PURPOSES = {
    "purchase": "Purchase",
    "refinance": "Refinance",
    "heloc": "HELOC",
}

_HOUSING_TYPES = {
    "single_family": "Single Family",
    "condo": "Condominium",
    "townhouse": "Townhouse",
    "multi_family": "Two-to-Four Unit",
}

_OCCUPANCY_TYPES = {
    "primary": "PrimaryResidence",
    "secondary": "SecondHome",
    "investment": "InvestmentProperty",
}

_MORTGAGE_TYPES = {
    "conventional": "Conventional",
    "fha": "FHA",
    "va": "VA",
    "jumbo": "Jumbo",
}

_AMORTIZATION_TYPES = {
    "fixed": "Fixed",
    "arm": "AdjustableRate",
}

_EMPLOYMENT_CLASSIFICATIONS = {
    "salaried": "Primary",
    "self-employed": "Primary",
    "self_employed": "Primary",
    "retired": "Primary",
    "military": "MilitaryPay",
}

_RESIDENCY_BASIS_TYPES = {
    "own": "Own",
    "rent": "Rent",
    "rent_free": "LivingRentFree",
}

_MARITAL_STATUSES = {
    "married": "Married",
    "unmarried": "Unmarried",
    "separated": "Separated",
}


def _lookup(table: dict[str, str], value: str | None, default: str) -> str:
    if not isinstance(value, str):
        return default
    return table.get(value, default)


def map_loan_purpose(product_type: str | None) -> str:
    """Product type → ``loanPurpose``."""
    return _lookup(_LOAN_PURPOSES, product_type, "Purchase")


def map_property_type(property_type: str | None) -> str:
    """Property type → ``subjectProperty_housingType``."""
    return _lookup(_HOUSING_TYPES, property_type, "Single Family")


def map_occupancy(usage: str | None) -> str:
    """Property usage → ``subjectProperty_propertyUsageType``."""
    return _lookup(_OCCUPANCY_TYPES, usage, "PrimaryResidence")


def map_mortgage_type(mortgage_type: str | None) -> str:
    return _lookup(_MORTGAGE_TYPES, mortgage_type, "Conventional")


def map_amortization_type(amortization_type: str | None) -> str:
    return _lookup(_AMORTIZATION_TYPES, amortization_type, "Fixed")


def map_employment_classification(status: str | None) -> str:
    """Employment status → ``employment_classificationType``.

    Everything except military pay is a "Primary" employment record in Arive.
    """
    return _lookup(_EMPLOYMENT_CLASSIFICATIONS, status, "Primary")


def map_residency_basis(housing_status: str | None) -> str:
    return _lookup(_RESIDENCY_BASIS_TYPES, housing_status, "Rent")


def map_marital_status(status: str | None) -> str:
    return _lookup(_MARITAL_STATUSES, status, "Unmarried")


# ---------------------------------------------------------------------------
# Payload assembly
# ---------------------------------------------------------------------------


def to_number(value: Any) -> int | float | None:
    """Coerce a Decimal / numeric string / number to a plain number.

    Returns None for missing, non-numeric, NaN or infinite input; never raises.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return None if isinstance(value, float) and not math.isfinite(value) else value
    try:
        number = float(value)
    except (TypeError, ValueError, ArithmeticError):
        return None
    if not math.isfinite(number):
        return None
    # Integral amounts go out as ints (350000, not 350000.0).
    return int(number) if number.is_integer() else number


def _as_utc(value: Any) -> datetime | None:
    """Normalise a datetime / date / ISO string to an aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    else:
        try:
            moment = datetime.fromisoformat(str(value))
        except ValueError:
            return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    try:
        return moment.astimezone(UTC)
    except (OverflowError, ValueError):
        return None


def decompose_birth_date(value: Any) -> tuple[str | None, str | None, str | None]:
    """Split a date of birth into (day, month, ``YYYY-MM-DD``) using UTC fields."""
    dob = _as_utc(value)
    if dob is None:
        return None, None, None
    return str(dob.day), str(dob.month), dob.date().isoformat()


def _format_date(value: Any) -> str | None:
    moment = _as_utc(value)
    return moment.date().isoformat() if moment else None


def _monthly_income(annual_income: Any) -> int | None:
    annual = to_number(annual_income)
    if not annual:
        return None
    # Round half up, not to even.
    return math.floor(annual / 12 + 0.5)


def _term_in_months(years: int | None) -> int | None:
    return years * 12 if years else None


def build_payload(app: Application) -> LOSPayload:
    """Map an application onto the LOS field schema. No I/O.

    Borrower name, e-mail and phone live on the profile, not the
    application, so they are left as None here and filled in by
    ``LOSBridge.push``.
    """
    day_of_birth, month_of_birth, birth_date = decompose_birth_date(app.date_of_birth)
    term_months = _term_in_months(app.loan_term)

    return LOSPayload(
        crm_reference_id=str(app.id),
        # Loan details
        loan_purpose=map_loan_purpose(app.product_type),
        mortgage_type=map_mortgage_type(app.mortgage_type),
        base_loan_amount=to_number(app.loan_amount),
        amortization_type=map_amortization_type(app.amortization_type),
        amortization_term=term_months,
        loan_term=term_months,
        down_payment=to_number(app.down_payment),
        purchase_price_or_estimated_value=to_number(app.property_value),
        # Subject property
        property_address=app.property_address or None,
        property_city=app.property_city or None,
        property_state=app.property_state or None,
        property_county=app.property_county or None,
        property_postal_code=app.zip_code or None,
        housing_type=map_property_type(app.property_type),
        property_usage_type=map_occupancy(app.property_usage),
        financed_unit_count=app.number_of_units or 1,
        # Borrower
        birth_date=birth_date,
        day_of_birth=day_of_birth,
        month_of_birth=month_of_birth,
        marital_status=map_marital_status(app.marital_status),
        first_time_home_buyer=app.first_time_home_buyer,
        preferred_language=app.preferred_language or DEFAULT_LANGUAGE,
        # Current address
        mailing_address=app.mailing_address or None,
        mailing_unit=app.mailing_unit or None,
        mailing_city=app.mailing_city or None,
        mailing_state=app.mailing_state or None,
        mailing_postal_code=app.mailing_zip_code or None,
        address_duration_months=app.address_duration_months or None,
        residency_basis=map_residency_basis(app.housing_status),
        # Employment
        employer_name=app.employer_name or None,
        employer_position=app.employer_position or None,
        employer_phone=app.employer_phone or None,
        employment_start_date=_format_date(app.employment_start_date),
        self_employed=app.self_employed,
        monthly_income=_monthly_income(app.annual_income),
        employment_classification=map_employment_classification(app.employment_status),
        # Credit
        estimated_fico=app.credit_score or None,
        # Source tracking
        lead_source=LEAD_SOURCE,
        loan_created_from=LOAN_CREATED_FROM,
    )


def split_full_name(full_name: str | None) -> tuple[str | None, str]:
    """First token is the first name; the rest (possibly "") is the last name."""
    parts = (full_name or "").split(" ")
    return parts[0] or None, " ".join(parts[1:])


def apply_profile(payload: LOSPayload, profile: Profile) -> LOSPayload:
    """Copy borrower identity from the profile onto the payload."""
    first_name, last_name = split_full_name(profile.full_name)
    return payload.model_copy(
        update={
            "first_name": first_name,
            "last_name": last_name,
            "email": profile.email,
            "mobile_phone": profile.phone,
        }
    )


# ---------------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------------


async def record_push_outcome(
    session: AsyncSession,
    application_id: str,
    status: LOSPushStatus,
) -> datetime:
    """Persist push status and timestamp in a single UPDATE."""
    pushed_at = datetime.now(UTC)
    stmt = (
        update(Application)
        .where(Application.id == application_id)
        .values(zapier_push_status=status, zapier_pushed_at=pushed_at)
    )
    await session.execute(stmt)
    await session.commit()
    return pushed_at


class LOSBridge:
    """Pushes applications to the LOS webhook.

    Built once by the app lifespan around a shared ``httpx.AsyncClient``;
    routes get it through ``get_los_bridge``.
    """

    def __init__(self, webhook_url: str | None, client: httpx.AsyncClient):
        self._webhook_url = webhook_url
        self._client = client

    @property
    def enabled(self) -> bool:
        return bool(self._webhook_url)

    async def push(self, session: AsyncSession, application_id: str) -> LOSPushStatus:
        """Deliver one application and record the outcome.

        Returns the recorded status. A missing webhook URL is recorded as
        ``failed`` and returned without raising; a failed delivery is
        recorded as ``failed`` and then raised as ``LOSDeliveryError``.

        Raises:
            ApplicationNotFoundError: no application with this id.
            LOSDeliveryError: the webhook call failed or returned non-2xx.
        """
        app = await session.get(Application, application_id)
        if app is None:
            raise ApplicationNotFoundError(application_id)

        if not self.enabled:
            logger.warning(
                "ZAPIER_WEBHOOK_URL not set -- skipping LOS push for application %s",
                application_id,
            )
            await record_push_outcome(session, application_id, LOSPushStatus.FAILED)
            return LOSPushStatus.FAILED

        payload = build_payload(app)

        lookup_id = app.new_user_id or app.user_id
        if lookup_id:
            profile = await session.get(Profile, lookup_id)
            if profile is not None:
                payload = apply_profile(payload, profile)
            else:
                logger.info("No profile %s for application %s", lookup_id, application_id)

        try:
            await self._deliver(payload, application_id)
        except LOSDeliveryError:
            await record_push_outcome(session, application_id, LOSPushStatus.FAILED)
            raise

        await record_push_outcome(session, application_id, LOSPushStatus.SENT)
        logger.info("Pushed application %s to LOS", application_id)
        return LOSPushStatus.SENT

    async def _deliver(self, payload: LOSPayload, application_id: str) -> None:
        try:
            response = await self._client.post(self._webhook_url, json=payload.to_wire())
        except httpx.HTTPError as exc:
            logger.error("LOS webhook request failed for application %s: %s", application_id, exc)
            raise LOSDeliveryError(
                f"LOS webhook request failed for application {application_id}"
            ) from exc

        if not response.is_success:
            logger.error(
                "LOS webhook returned %s for application %s: %s",
                response.status_code,
                application_id,
                response.text,
            )
            raise LOSDeliveryError(f"LOS webhook rejected application {application_id}")


def get_los_bridge(request: Request) -> LOSBridge:
    """FastAPI dependency returning the bridge built at startup."""
    return request.app.state.los_bridge
