import base64

import pytest
import requests

from loadgen.core.config import Settings
from loadgen.core.transport import IngestClient, basic_auth


class FakeResponse:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text


class FakeSession(requests.Session):
    def __init__(self, status_code=204, error=None):
        super().__init__()
        self.status_code = status_code
        self.error = error
        self.calls = []

    def post(self, url, data=None, headers=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        if self.error:
            raise self.error
        return FakeResponse(self.status_code)


def test_basic_auth_header():
    header = basic_auth("root@example.com", "Complexpass#123")
    assert header == "Basic cm9vdEBleGFtcGxlLmNvbTpDb21wbGV4cGFzcyMxMjM="
    assert base64.b64decode(header.split(" ")[1]) == b"root@example.com:Complexpass#123"


def test_post_returns_status_and_latency():
    session = FakeSession(status_code=204)
    client = IngestClient(Settings(TIMEOUT_MS=2500), session=session)

    status, latency = client.post("http://sink/push", b"{}", {"X-Scope-OrgID": "42"})

    assert status == 204
    assert latency >= 0
    call = session.calls[0]
    assert call["timeout"] == 2.5
    assert call["headers"] == {"X-Scope-OrgID": "42"}
    assert session.headers["Content-Type"] == "application/json"
    assert session.headers["User-Agent"].startswith("Mozilla/5.0")


@pytest.mark.parametrize("error", [
    requests.ConnectionError("refused"),
    requests.Timeout("too slow"),
])
def test_post_failure_is_status_zero(error, caplog):
    session = FakeSession(error=error)
    client = IngestClient(Settings(), session=session)

    status, _ = client.post("http://sink/push", b"[]")

    assert status == 0
    assert len(session.calls) == 1  # no retry
    assert "failed" in caplog.text
