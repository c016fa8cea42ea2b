import json
from datetime import datetime, timedelta, timezone
from enum import Enum

import httpx
import pytest

from meilikit.domain.exceptions import ApiError, MeiliSearchError, TransportError
from meilikit.infrastructure.http.client import HttpRequests, client_agent, normalize_host
from meilikit.infrastructure.http.serializers import encode_json, encode_query
from meilikit.version import __version__


class Color(Enum):
    RED = "red"


def _recording_transport(
    requests: list[httpx.Request], response: httpx.Response | None = None
) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return response if response is not None else httpx.Response(200, json={"ok": True})

    return httpx.MockTransport(handler)


@pytest.mark.parametrize(
    ("host", "expected"),
    [
        ("localhost:7700", "http://localhost:7700/"),
        ("http://localhost:7700", "http://localhost:7700/"),
        ("https://edge.example.com/meili/", "https://edge.example.com/meili/"),
    ],
)
def test_normalize_host(host: str, expected: str) -> None:
    assert normalize_host(host) == expected


def test_encode_query_flattens_values() -> None:
    params = encode_query(
        {
            "sort": ["title:asc", "year:desc"],
            "limit": 5,
            "showMatchesPosition": True,
            "color": Color.RED,
            "afterEnqueuedAt": datetime(2023, 1, 2, 3, 4, 5),
            "filter": None,
        }
    )

    assert params == {
        "sort": "title:asc,year:desc",
        "limit": "5",
        "showMatchesPosition": "true",
        "color": "red",
        "afterEnqueuedAt": "2023-01-02T03:04:05+00:00",
    }


def test_encode_query_keeps_explicit_offsets() -> None:
    paris = timezone(timedelta(hours=1))

    params = encode_query(
        {
            "beforeStartedAt": datetime(2023, 1, 2, 3, 4, 5, tzinfo=paris),
            "afterFinishedAt": datetime(2023, 1, 2, tzinfo=timezone.utc),
        }
    )

    assert params == {
        "beforeStartedAt": "2023-01-02T03:04:05+01:00",
        "afterFinishedAt": "2023-01-02T00:00:00+00:00",
    }


def test_encode_json_assumes_utc_for_naive_datetimes() -> None:
    assert json.loads(encode_json({"at": datetime(2023, 1, 2)})) == {"at": "2023-01-02T00:00:00+00:00"}


@pytest.mark.asyncio
async def test_request_sends_auth_and_agent_headers() -> None:
    requests: list[httpx.Request] = []
    http = HttpRequests(
        "localhost:7700",
        "masterKey",
        client_agents=["my-app (v1.0)"],
        transport=_recording_transport(requests),
    )

    assert await http.get("health") == {"ok": True}

    request = requests[0]
    assert str(request.url) == "http://localhost:7700/health"
    assert request.headers["Authorization"] == "Bearer masterKey"
    assert request.headers["X-Meilisearch-Client"] == client_agent(["my-app (v1.0)"])
    assert request.headers["X-Meilisearch-Client"].startswith(f"meilikit (v{__version__})")
    await http.aclose()


@pytest.mark.asyncio
async def test_request_without_key_is_unauthenticated() -> None:
    requests: list[httpx.Request] = []
    http = HttpRequests("localhost:7700", transport=_recording_transport(requests))

    await http.get("version")

    assert "Authorization" not in requests[0].headers
    await http.aclose()


@pytest.mark.asyncio
async def test_json_body_and_query_params() -> None:
    requests: list[httpx.Request] = []
    http = HttpRequests("localhost:7700", transport=_recording_transport(requests))

    await http.post("indexes/movies/documents", [{"id": 1}], {"primaryKey": "id", "csvDelimiter": None})

    request = requests[0]
    assert request.method == "POST"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == [{"id": 1}]
    assert dict(request.url.params) == {"primaryKey": "id"}
    await http.aclose()


@pytest.mark.asyncio
async def test_raw_body_is_forwarded_untouched() -> None:
    requests: list[httpx.Request] = []
    http = HttpRequests("localhost:7700", transport=_recording_transport(requests))
    csv = "id;title\n1;Alien\n"

    await http.post(
        "indexes/movies/documents",
        csv,
        {"csvDelimiter": ";"},
        {"Content-Type": "text/csv"},
    )

    request = requests[0]
    assert request.headers["Content-Type"] == "text/csv"
    assert request.content == csv.encode("utf-8")
    assert request.url.params["csvDelimiter"] == ";"
    await http.aclose()


@pytest.mark.asyncio
async def test_explicit_null_body_is_sent() -> None:
    requests: list[httpx.Request] = []
    http = HttpRequests("localhost:7700", transport=_recording_transport(requests))

    await http.put("indexes/movies/settings/distinct-attribute", None)
    await http.post("dumps")

    assert requests[0].content == b"null"
    assert requests[1].content == b""
    await http.aclose()


@pytest.mark.asyncio
async def test_empty_response_decodes_to_none() -> None:
    http = HttpRequests(
        "localhost:7700",
        transport=_recording_transport([], httpx.Response(204)),
    )

    assert await http.delete("keys/abc") is None
    await http.aclose()


@pytest.mark.asyncio
async def test_error_envelope_becomes_api_error() -> None:
    envelope = {
        "message": "Index `movies` not found.",
        "code": "index_not_found",
        "type": "invalid_request",
        "link": "https://docs.meilisearch.com/errors#index_not_found",
    }
    http = HttpRequests(
        "localhost:7700",
        transport=_recording_transport([], httpx.Response(404, json=envelope)),
    )

    with pytest.raises(ApiError) as exc_info:
        await http.get("indexes/movies")

    error = exc_info.value
    assert error.status_code == 404
    assert error.code == "index_not_found"
    assert error.type == "invalid_request"
    assert error.link == envelope["link"]
    assert error.message == envelope["message"]
    await http.aclose()


@pytest.mark.asyncio
async def test_non_json_error_keeps_status() -> None:
    http = HttpRequests(
        "localhost:7700",
        transport=_recording_transport([], httpx.Response(502, text="Bad Gateway")),
    )

    with pytest.raises(ApiError) as exc_info:
        await http.get("health")

    assert exc_info.value.status_code == 502
    assert exc_info.value.code is None
    assert exc_info.value.message == "Bad Gateway"
    await http.aclose()


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    http = HttpRequests("localhost:7700", transport=httpx.MockTransport(handler))

    with pytest.raises(TransportError) as exc_info:
        await http.get("health")

    assert not isinstance(exc_info.value, ApiError)
    assert isinstance(exc_info.value, MeiliSearchError)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.method == "GET"
    assert exc_info.value.url == "http://localhost:7700/health"
    await http.aclose()


@pytest.mark.asyncio
async def test_http_requests_is_an_async_context_manager() -> None:
    async with HttpRequests("localhost:7700", transport=_recording_transport([])) as http:
        assert http.base_url == "http://localhost:7700/"
