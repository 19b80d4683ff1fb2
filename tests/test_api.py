import httpx
from fastapi.testclient import TestClient

from exchange.core.errors import DecodeError, NetworkError
from exchange.main import create_app
from exchange.services.rates.providers import ApilayerRateProvider

from .conftest import FakeRateProvider


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Exchange Calculator API"
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["version"] == "0.1.0"


def test_unknown_route_is_404(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_request_id_header_is_echoed(client):
    resp = client.get("/health", headers={"x-request-id": "abc-123"})
    assert resp.headers["x-request-id"] == "abc-123"


def test_currencies_with_picker_exclusion(client):
    codes = [c["code"] for c in client.get("/currencies/").json()]
    assert codes == ["KRW", "USD", "JPY", "PHP"]
    codes = [c["code"] for c in client.get("/currencies/", params={"exclude": "USD"}).json()]
    assert codes == ["KRW", "JPY", "PHP"]


def test_get_rate(client):
    resp = client.get("/rates/USD/KRW")
    assert resp.status_code == 200
    body = resp.json()
    assert body["pair"] == "USDKRW"
    assert body["rate"] == 1300.0
    assert body["balance"] == "1300.00 KRW / USD"
    assert body["time"] == "2023-11-14 / 22:13:20"


def test_get_rate_rejects_bad_pairs(client):
    assert client.get("/rates/USD/USD").status_code == 422
    assert client.get("/rates/USD/EUR").status_code == 422


def test_upstream_failures_are_502(settings):
    for error, code in (
        (NetworkError("timed out"), "upstream_unavailable"),
        (DecodeError("garbage"), "upstream_malformed"),
    ):
        app = create_app(settings_override=settings, provider_override=FakeRateProvider(error=error))
        resp = TestClient(app).get("/rates/USD/KRW")
        assert resp.status_code == 502
        assert resp.json()["error"] == code


def test_convert(client):
    resp = client.post("/convert/", json={"source": "USD", "destination": "KRW", "amount": "10000"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["value"] == 13_000_000.0
    assert body["value_text"] == "13,000,000.00 KRW"


def test_convert_wrong_values(client):
    for amount in ("0", "10000.01", "1.2.3", "abc"):
        resp = client.post("/convert/", json={"source": "USD", "destination": "KRW", "amount": amount})
        assert resp.status_code == 422
        assert resp.json()["error"] == "wrong_value"


def test_screen_flow(client):
    state = client.get("/screen").json()
    assert state["status"] == "idle"
    assert state["balance"] == "Loading..."

    state = client.post("/screen/compute")
    assert state.status_code == 409

    state = client.post("/screen/appear").json()
    assert state["status"] == "ready"
    assert state["balance"] == "1300.00 KRW / USD"
    assert state["can_compute"] is True

    state = client.put("/screen/amount", json={"text": "10,000"}).json()
    assert state["amount"] == "10000"

    state = client.post("/screen/compute").json()
    assert state["result"] == 13_000_000.0
    assert state["result_text"] == "13,000,000.00 KRW"

    state = client.put("/screen/amount", json={"text": "10000.01"}).json()
    assert state["result"] is None
    state = client.post("/screen/compute").json()
    assert state["alert"] == "wrong_value"
    assert state["alert_message"]
    state = client.post("/screen/dismiss").json()
    assert state["alert"] is None

    state = client.put("/screen/pair", json={"source": "JPY", "destination": "PHP"}).json()
    assert state["source"] == "JPY"
    assert state["amount"] == "0"
    assert state["rate"] == 0.37
    assert state["generation"] == 2


def test_screen_pair_validation(client):
    resp = client.put("/screen/pair", json={"source": "KRW", "destination": "KRW"})
    assert resp.status_code == 422


def test_screen_error_and_retry(settings):
    provider = FakeRateProvider({"USDKRW": 1300.0}, error=NetworkError("timed out"))
    client = TestClient(create_app(settings_override=settings, provider_override=provider))

    state = client.post("/screen/appear").json()
    assert state["status"] == "error"
    assert state["alert"] == "connection_error"
    assert state["rate"] is None

    state = client.post("/screen/dismiss").json()
    assert state["status"] == "error"

    provider.error = None
    state = client.post("/screen/retry").json()
    assert state["status"] == "ready"
    assert client.post("/screen/retry").status_code == 409


def _nan_upstream_client(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            content=b'{"quotes": {"USDKRW": NaN}, "source": "USD", "success": true, "timestamp": 1700000000}',
            headers={"content-type": "application/json"},
        )

    provider = ApilayerRateProvider(
        base_url="https://api.apilayer.com/currency_data/live",
        api_key="k",
        transport=httpx.MockTransport(handler),
    )
    return TestClient(create_app(settings_override=settings, provider_override=provider))


def test_non_finite_upstream_rate_is_502(settings):
    resp = _nan_upstream_client(settings).get("/rates/USD/KRW")
    assert resp.status_code == 502
    assert resp.json()["error"] == "upstream_malformed"


def test_non_finite_upstream_rate_leaves_screen_renderable(settings):
    client = _nan_upstream_client(settings)
    state = client.post("/screen/appear")
    assert state.status_code == 200
    assert state.json()["status"] == "error"
    assert state.json()["alert"] == "connection_error"

    resp = client.get("/screen")
    assert resp.status_code == 200
    assert resp.json()["balance"] == "Loading..."
    assert client.post("/screen/dismiss").status_code == 200


def test_same_currency_pair_body_is_a_json_422(client):
    resp = client.put("/screen/pair", json={"source": "KRW", "destination": "KRW"})
    assert resp.status_code == 422
    body = resp.json()
    assert body["error"] == "validation_error"
    assert "destination cannot equal source" in body["detail"][0]["msg"]


def test_long_pasted_amount_is_filtered_not_rejected(client):
    text = "USD 1,000.50" + " " * 60
    assert len(text) > 64
    resp = client.put("/screen/amount", json={"text": text})
    assert resp.status_code == 200
    assert resp.json()["amount"] == "1000.50"


def test_convert_checks_amount_before_fetching(settings, provider):
    client = TestClient(create_app(settings_override=settings, provider_override=provider))
    for amount in ("abc", "0", "10000.01", "1.2.3"):
        resp = client.post("/convert/", json={"source": "USD", "destination": "KRW", "amount": amount})
        assert resp.status_code == 422
    assert provider.calls == []

    client.post("/convert/", json={"source": "USD", "destination": "KRW", "amount": "5"})
    assert provider.calls == ["USDKRW"]
