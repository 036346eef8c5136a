# This project was developed with assistance from AI tools.
"""Tests for LOSBridge.push -- delivery and outcome recording."""

import json
from datetime import UTC, datetime

import httpx
import pytest
from portal_db import LOSPushStatus

from portal_api.services.los_bridge import (
    ApplicationNotFoundError,
    LOSBridge,
    LOSDeliveryError,
    record_push_outcome,
)
from tests.factories import make_application, make_profile, make_session, update_params

WEBHOOK_URL = "https://hooks.zapier.test/hooks/catch/123/abc"


class _Recorder:
    """MockTransport handler that records requests and replies with a fixed status."""

    def __init__(self, status_code: int = 200, text: str = '{"status": "success"}', error=None):
        self.requests: list[httpx.Request] = []
        self._status_code = status_code
        self._text = text
        self._error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error("connection refused", request=request)
        return httpx.Response(self._status_code, text=self._text)

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def recorder():
    return _Recorder()


@pytest.fixture
async def http_client(recorder):
    async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
        yield client


# ---------------------------------------------------------------------------
# Successful delivery
# ---------------------------------------------------------------------------


async def test_push_posts_json_and_records_sent(recorder, http_client):
    session = make_session(make_application(), make_profile())
    bridge = LOSBridge(WEBHOOK_URL, http_client)

    result = await bridge.push(session, "app-1")

    assert result == LOSPushStatus.SENT
    assert len(recorder.requests) == 1
    request = recorder.requests[0]
    assert request.method == "POST"
    assert str(request.url) == WEBHOOK_URL
    assert request.headers["content-type"] == "application/json"

    params = update_params(session)
    assert params["zapier_push_status"] == "sent"
    assert isinstance(params["zapier_pushed_at"], datetime)
    assert session.execute.await_count == 1
    session.commit.assert_awaited_once()


async def test_end_to_end_payload_with_profile(recorder, http_client):
    session = make_session(make_application(), make_profile(full_name="Jane A. Doe"))

    await LOSBridge(WEBHOOK_URL, http_client).push(session, "app-1")

    body = recorder.last_body
    assert body["loanPurpose"] == "Purchase"
    assert body["mortgageType"] == "FHA"
    assert body["baseLoanAmount"] == 350000
    assert body["loanTerm"] == 360
    assert body["subjectProperty_housingType"] == "Condominium"
    assert body["subjectProperty_propertyUsageType"] == "InvestmentProperty"
    assert body["loanBorrowers_firstName"] == "Jane"
    assert body["loanBorrowers_lastName"] == "A. Doe"
    assert body["loanBorrowers_emailAddressText"] == "jane@example.com"
    assert body["loanBorrowers_mobilePhone10digit"] == "5125550100"


async def test_new_user_id_takes_precedence_over_legacy_user_id(recorder, http_client):
    app = make_application(new_user_id="user-new", user_id="user-old")
    session = make_session(app, make_profile(id="user-new", full_name="New Owner"))

    await LOSBridge(WEBHOOK_URL, http_client).push(session, "app-1")

    assert recorder.last_body["loanBorrowers_firstName"] == "New"


async def test_legacy_user_id_used_when_no_new_user_id(recorder, http_client):
    app = make_application(new_user_id=None, user_id="legacy-7")
    session = make_session(app, make_profile(id="legacy-7", full_name="Old Timer"))

    await LOSBridge(WEBHOOK_URL, http_client).push(session, "app-1")

    assert recorder.last_body["loanBorrowers_lastName"] == "Timer"


async def test_missing_profile_does_not_abort_push(recorder, http_client):
    session = make_session(make_application(), profile=None)

    result = await LOSBridge(WEBHOOK_URL, http_client).push(session, "app-1")

    assert result == LOSPushStatus.SENT
    body = recorder.last_body
    assert body["loanBorrowers_firstName"] is None
    assert body["loanBorrowers_lastName"] is None
    assert body["loanBorrowers_emailAddressText"] is None
    assert update_params(session)["zapier_push_status"] == "sent"


async def test_missing_profile_with_failed_delivery_still_records():
    rejecting = _Recorder(status_code=500, text="boom")
    session = make_session(make_application(), profile=None)

    async with httpx.AsyncClient(transport=httpx.MockTransport(rejecting)) as client:
        with pytest.raises(LOSDeliveryError):
            await LOSBridge(WEBHOOK_URL, client).push(session, "app-1")

    assert update_params(session)["zapier_push_status"] == "failed"


# ---------------------------------------------------------------------------
# Disabled integration
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("webhook_url", [None, ""])
async def test_missing_webhook_url_records_failed_without_network(recorder, http_client, webhook_url):
    session = make_session(make_application(), make_profile())
    bridge = LOSBridge(webhook_url, http_client)

    result = await bridge.push(session, "app-1")

    assert result == LOSPushStatus.FAILED
    assert recorder.requests == []
    assert session.execute.await_count == 1
    params = update_params(session)
    assert params["zapier_push_status"] == "failed"
    assert isinstance(params["zapier_pushed_at"], datetime)


async def test_enabled_flag(http_client):
    assert LOSBridge(WEBHOOK_URL, http_client).enabled is True
    assert LOSBridge(None, http_client).enabled is False


# ---------------------------------------------------------------------------
# Failed delivery
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("status_code", [400, 404, 500, 503])
async def test_non_success_response_records_failed_then_raises(status_code):
    rejecting = _Recorder(status_code=status_code, text="secret upstream detail")
    session = make_session(make_application(), make_profile())

    async with httpx.AsyncClient(transport=httpx.MockTransport(rejecting)) as client:
        with pytest.raises(LOSDeliveryError) as exc_info:
            await LOSBridge(WEBHOOK_URL, client).push(session, "app-1")

    assert "secret upstream detail" not in str(exc_info.value)
    assert session.execute.await_count == 1
    assert update_params(session)["zapier_push_status"] == "failed"
    session.commit.assert_awaited_once()


async def test_transport_error_records_failed_then_raises():
    broken = _Recorder(error=httpx.ConnectError)
    session = make_session(make_application(), make_profile())

    async with httpx.AsyncClient(transport=httpx.MockTransport(broken)) as client:
        with pytest.raises(LOSDeliveryError) as exc_info:
            await LOSBridge(WEBHOOK_URL, client).push(session, "app-1")

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert update_params(session)["zapier_push_status"] == "failed"


async def test_failure_is_logged_with_status_and_body(caplog):
    rejecting = _Recorder(status_code=422, text="missing loanPurpose")
    session = make_session(make_application(), make_profile())

    async with httpx.AsyncClient(transport=httpx.MockTransport(rejecting)) as client:
        with pytest.raises(LOSDeliveryError):
            await LOSBridge(WEBHOOK_URL, client).push(session, "app-1")

    assert "422" in caplog.text
    assert "missing loanPurpose" in caplog.text


async def test_two_pushes_send_twice(recorder, http_client):
    """No dedup: each push is a separate submission."""
    session = make_session(make_application(), make_profile())
    bridge = LOSBridge(WEBHOOK_URL, http_client)

    await bridge.push(session, "app-1")
    await bridge.push(session, "app-1")

    assert len(recorder.requests) == 2
    assert session.execute.await_count == 2


# ---------------------------------------------------------------------------
# Unknown application / outcome recording
# ---------------------------------------------------------------------------


async def test_unknown_application_raises_and_records_nothing(recorder, http_client):
    session = make_session(application=None)

    with pytest.raises(ApplicationNotFoundError):
        await LOSBridge(WEBHOOK_URL, http_client).push(session, "missing")

    assert recorder.requests == []
    session.execute.assert_not_awaited()


async def test_record_push_outcome_writes_status_and_timestamp_together():
    session = make_session()
    before = datetime.now(UTC)

    pushed_at = await record_push_outcome(session, "app-9", LOSPushStatus.SENT)

    params = update_params(session)
    assert set(params) >= {"zapier_push_status", "zapier_pushed_at"}
    assert params["zapier_push_status"] == "sent"
    assert params["zapier_pushed_at"] == pushed_at
    assert pushed_at >= before
    assert "app-9" in params.values()
