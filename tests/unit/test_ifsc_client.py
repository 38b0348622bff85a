"""IfscClient tests: response mapping, error translation and client ownership."""

import httpx
import pytest

from vendorhub.domain.exceptions import ExternalServiceException
from vendorhub.infrastructure.external import IfscClient


def _client(handler) -> IfscClient:
    return IfscClient(
        "https://ifsc.test/",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


async def test_lookup_maps_directory_fields() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(
            200, json={"BANK": "Axis Bank", "IFSC": "UTIB0000001", "CITY": "Pune", "MICR": None}
        )

    details = await _client(handler).lookup("UTIB0000001")

    assert seen == ["https://ifsc.test/UTIB0000001"]
    assert details.bank == "Axis Bank"
    assert details.city == "Pune"
    assert details.micr is None


async def test_not_found_is_none() -> None:
    client = _client(lambda request: httpx.Response(404, text="Not Found"))
    assert await client.lookup("UTIB0000001") is None


async def test_payload_without_bank_is_an_error() -> None:
    client = _client(lambda request: httpx.Response(200, json={"IFSC": "UTIB0000001"}))
    with pytest.raises(ExternalServiceException):
        await client.lookup("UTIB0000001")


async def test_network_error_is_an_external_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ExternalServiceException) as exc_info:
        await _client(handler).lookup("UTIB0000001")
    assert exc_info.value.details == {"service": "ifsc"}


async def test_aclose_leaves_injected_client_open() -> None:
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(404)))
    client = IfscClient("https://ifsc.test", http_client=http)
    await client.aclose()
    assert http.is_closed is False
    await http.aclose()


async def test_aclose_closes_owned_client() -> None:
    client = IfscClient("https://ifsc.test", timeout=1.0)
    await client.aclose()
    assert client._http.is_closed is True
