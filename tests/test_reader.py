import httpx
import pytest

from app.errors import (
    ExtractionAuthError,
    ExtractionGenericError,
    ExtractionRateLimitError,
)
from app.reader import ReaderClient


def make_reader(cfg, handler):
    return ReaderClient(cfg, client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_reader_url_encodes_target_as_one_segment(cfg):
    reader = ReaderClient(cfg)
    assert reader.reader_url("https://example.com/seite?a=1") == (
        "https://r.jina.ai/https%3A%2F%2Fexample.com%2Fseite%3Fa%3D1"
    )


def test_extract_returns_text_and_sends_text_format(cfg):
    seen = {}

    def handler(request):
        seen["headers"] = request.headers
        return httpx.Response(200, text="Wir bieten Höhentraining und Wellness in München.")

    text = make_reader(cfg, handler).extract("https://example.com")

    assert text == "Wir bieten Höhentraining und Wellness in München."
    assert seen["headers"]["X-Return-Format"] == "text"
    assert "Authorization" not in seen["headers"]


def test_extract_sends_bearer_token_when_configured(cfg):
    cfg.jina_api_key = "secret"
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, text="Inhalt")

    make_reader(cfg, handler).extract("https://example.com")
    assert seen["auth"] == "Bearer secret"


@pytest.mark.parametrize("status, error", [
    (401, ExtractionAuthError),
    (403, ExtractionAuthError),
    (429, ExtractionRateLimitError),
    (500, ExtractionGenericError),
    (404, ExtractionGenericError),
])
def test_extract_maps_http_failures(cfg, status, error):
    reader = make_reader(cfg, lambda request: httpx.Response(status, json={"error": {"message": "nope"}}))
    with pytest.raises(error) as excinfo:
        reader.extract("https://example.com")
    assert excinfo.value.url == "https://example.com"


def test_extract_maps_transport_errors(cfg):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ExtractionGenericError):
        make_reader(cfg, handler).extract("https://example.com")


@pytest.mark.parametrize("body", ["", "   \n\t "])
def test_extract_empty_content_is_soft_failure(cfg, body):
    reader = make_reader(cfg, lambda request: httpx.Response(200, text=body))
    assert reader.extract("https://example.com") is None


def test_error_body_prefers_json_message():
    assert ReaderClient._error_body(httpx.Response(400, json={"error": {"message": "bad url"}})) == "bad url"
    assert ReaderClient._error_body(httpx.Response(502, text="Bad Gateway")) == "Bad Gateway"
