"""BankService tests: static bank directory and cached IFSC lookups (mocked HTTP)."""

import httpx
import pytest

from vendorhub.application.dtos.bank import BankResult
from vendorhub.application.services import BankService
from vendorhub.domain.exceptions import (
    ExternalServiceException,
    ResourceNotFoundException,
    ValidationException,
)
from vendorhub.infrastructure.cache import CacheService, EntityCache
from vendorhub.infrastructure.external import IfscClient

HDFC_BRANCH = {
    "BANK": "HDFC Bank",
    "IFSC": "HDFC0001234",
    "BRANCH": "Andheri West",
    "CITY": "Mumbai",
    "STATE": "Maharashtra",
    "BANKCODE": "HDFC",
    "MICR": "400240015",
}


class Directory:
    """Stand-in IFSC directory; records every code requested."""

    def __init__(self) -> None:
        self.requested: list[str] = []
        self.status = 200

    def __call__(self, request: httpx.Request) -> httpx.Response:
        code = request.url.path.rsplit("/", 1)[-1]
        self.requested.append(code)
        if self.status != 200:
            return httpx.Response(self.status)
        if code == HDFC_BRANCH["IFSC"]:
            return httpx.Response(200, json=HDFC_BRANCH)
        return httpx.Response(404, text="Not Found")


@pytest.fixture
def directory() -> Directory:
    return Directory()


@pytest.fixture
def bank_service(directory: Directory, cache: CacheService) -> BankService:
    http = httpx.AsyncClient(transport=httpx.MockTransport(directory))
    return BankService(
        IfscClient("https://ifsc.test", http_client=http),
        EntityCache(cache, "banks", ttl=86400),
    )


async def test_ifsc_details_are_cached(
    bank_service: BankService, directory: Directory, redis_client
) -> None:
    first = await bank_service.validate_ifsc("HDFC0001234")
    second = await bank_service.validate_ifsc("hdfc0001234")

    assert first == second
    assert first.branch == "Andheri West"
    assert directory.requested == ["HDFC0001234"]
    assert 300 < await redis_client.ttl("banks:ifsc:HDFC0001234") <= 86400


async def test_unknown_ifsc_is_rejected_and_not_cached(
    bank_service: BankService, directory: Directory, redis_client
) -> None:
    for _ in range(2):
        with pytest.raises(ValidationException):
            await bank_service.validate_ifsc("SBIN0009999")
    assert directory.requested == ["SBIN0009999", "SBIN0009999"]
    assert await redis_client.exists("banks:ifsc:SBIN0009999") == 0


@pytest.mark.parametrize("bad", ["", "HDFC123", "HDFC1001234", "HDFC0001234X", "HD*C0001234"])
async def test_malformed_ifsc_never_reaches_directory(
    bank_service: BankService, directory: Directory, bad: str
) -> None:
    with pytest.raises(ValidationException):
        await bank_service.validate_ifsc(bad)
    assert directory.requested == []


async def test_directory_failure_is_an_external_error(
    bank_service: BankService, directory: Directory, redis_client
) -> None:
    directory.status = 503
    with pytest.raises(ExternalServiceException):
        await bank_service.validate_ifsc("HDFC0001234")
    assert await redis_client.exists("banks:ifsc:HDFC0001234") == 0


async def test_bank_from_ifsc_uses_prefix_and_directory_name(bank_service: BankService) -> None:
    bank = await bank_service.get_bank_from_ifsc("HDFC0001234")
    assert bank == BankResult(bank_code="HDFC", bank_name="HDFC Bank", ifsc_prefix="HDFC")


async def test_bank_list_is_sorted_and_cached(bank_service: BankService, cache) -> None:
    banks = await bank_service.list_banks()
    names = [b.bank_name for b in banks]
    assert names == sorted(names)
    assert len(await cache.get("banks:all")) == len(banks)


async def test_search_needs_two_characters(bank_service: BankService) -> None:
    everything = await bank_service.list_banks()
    assert await bank_service.search_banks("b") == everything
    assert await bank_service.search_banks(None) == everything
    found = await bank_service.search_banks("baroda")
    assert [b.bank_code for b in found] == ["BOB"]
    assert [b.bank_code for b in await bank_service.search_banks("utib")] == ["AXIS"]


async def test_bank_by_code_or_prefix(bank_service: BankService) -> None:
    assert (await bank_service.get_bank_by_code("sbi")).ifsc_prefix == "SBIN"
    assert (await bank_service.get_bank_by_code("UTIB")).bank_code == "AXIS"
    with pytest.raises(ResourceNotFoundException):
        await bank_service.get_bank_by_code("NOPE")


async def test_lookup_without_client_is_an_external_error(cache: CacheService) -> None:
    service = BankService(None, EntityCache(cache, "banks", ttl=86400))
    with pytest.raises(ExternalServiceException):
        await service.validate_ifsc("HDFC0001234")
    assert len(await service.list_banks()) > 0


async def test_lookup_works_while_cache_is_down(
    directory: Directory, broken_cache: CacheService
) -> None:
    http = httpx.AsyncClient(transport=httpx.MockTransport(directory))
    service = BankService(
        IfscClient("https://ifsc.test", http_client=http),
        EntityCache(broken_cache, "banks", ttl=86400),
    )
    assert (await service.validate_ifsc("HDFC0001234")).bank == "HDFC Bank"
    assert (await service.validate_ifsc("HDFC0001234")).bank == "HDFC Bank"
    assert len(directory.requested) == 2
