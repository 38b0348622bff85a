"""Bank application service: bank directory and IFSC validation for vendor payouts.

The bank list is static and cached under banks:all. IFSC lookups go to
the external directory once per code and are cached under
banks:ifsc:<IFSC> with the long bank TTL; unknown codes are not cached.
"""

from __future__ import annotations

import re

from pydantic import TypeAdapter

from vendorhub.application.dtos.bank import BankResult, IfscDetails
from vendorhub.core.constants import CACHE_PREFIX_BANKS
from vendorhub.domain.exceptions import (
    ExternalServiceException,
    ResourceNotFoundException,
    ValidationException,
)
from vendorhub.infrastructure.cache import EntityCache
from vendorhub.infrastructure.cache import keys
from vendorhub.infrastructure.external import IfscClient

_BANK_LIST = TypeAdapter(list[BankResult])
_IFSC = TypeAdapter(IfscDetails)

# Four-letter bank prefix, a literal 0, then a six-character branch code.
_IFSC_RE = re.compile(r"[A-Z]{4}0[A-Z0-9]{6}")

MIN_SEARCH_LENGTH = 2

KNOWN_BANKS: tuple[BankResult, ...] = (
    BankResult("SBI", "State Bank of India", "SBIN"),
    BankResult("HDFC", "HDFC Bank", "HDFC"),
    BankResult("ICICI", "ICICI Bank", "ICIC"),
    BankResult("AXIS", "Axis Bank", "UTIB"),
    BankResult("KOTAK", "Kotak Mahindra Bank", "KKBK"),
    BankResult("YES", "Yes Bank", "YESB"),
    BankResult("IDFC", "IDFC First Bank", "IDFB"),
    BankResult("PNB", "Punjab National Bank", "PUNB"),
    BankResult("BOB", "Bank of Baroda", "BARB"),
    BankResult("CANARA", "Canara Bank", "CNRB"),
    BankResult("UNION", "Union Bank of India", "UBIN"),
    BankResult("INDIAN", "Indian Bank", "IDIB"),
    BankResult("BOI", "Bank of India", "BKID"),
    BankResult("CENTRAL", "Central Bank of India", "CBIN"),
    BankResult("INDIAN_OVERSEAS", "Indian Overseas Bank", "IOBA"),
    BankResult("UCO", "UCO Bank", "UCBA"),
    BankResult("BANDHAN", "Bandhan Bank", "BDBL"),
    BankResult("FEDERAL", "Federal Bank", "FDRL"),
    BankResult("SOUTH_INDIAN", "South Indian Bank", "SIBL"),
    BankResult("KARUR_VYSYA", "Karur Vysya Bank", "KVBL"),
    BankResult("CITY_UNION", "City Union Bank", "CIUB"),
    BankResult("INDUSIND", "IndusInd Bank", "INDB"),
    BankResult("RBL", "RBL Bank", "RATN"),
    BankResult("JAMMU_KASHMIR", "Jammu & Kashmir Bank", "JAKA"),
    BankResult("DCB", "DCB Bank", "DCBL"),
    BankResult("NAINITAL", "Nainital Bank", "NTBL"),
    BankResult("TAMILNAD_MERCANTILE", "Tamilnad Mercantile Bank", "TMBL"),
    BankResult("DHANLAXMI", "Dhanlaxmi Bank", "DLXB"),
)


def normalize_ifsc(ifsc: str) -> str:
    """Upper-case and check an IFSC code.

    Raises:
        ValidationException: If the code is not 11 characters of the IFSC shape.
    """
    code = (ifsc or "").strip().upper()
    if not _IFSC_RE.fullmatch(code):
        raise ValidationException("Invalid IFSC code format", "ifsc")
    return code


class BankService:
    """Banks and IFSC branch details."""

    def __init__(self, ifsc_client: IfscClient | None, cache: EntityCache) -> None:
        self._ifsc_client = ifsc_client
        self._cache = cache

    async def _load_banks(self) -> list[BankResult]:
        return sorted(KNOWN_BANKS, key=lambda b: b.bank_name)

    async def list_banks(self) -> list[BankResult]:
        """Every known bank ordered by name."""
        return await self._cache.fetch(
            keys.all_key(CACHE_PREFIX_BANKS), _BANK_LIST, self._load_banks
        )

    async def search_banks(self, query: str | None) -> list[BankResult]:
        """Banks whose name, code or IFSC prefix contains query.

        Queries shorter than MIN_SEARCH_LENGTH return the full list.
        """
        banks = await self.list_banks()
        term = (query or "").strip().lower()
        if len(term) < MIN_SEARCH_LENGTH:
            return banks
        return [
            b
            for b in banks
            if term in b.bank_name.lower()
            or term in b.bank_code.lower()
            or term in b.ifsc_prefix.lower()
        ]

    async def get_bank_by_code(self, code: str) -> BankResult:
        """Bank by its code or IFSC prefix (case-insensitive)."""
        wanted = code.strip().upper()
        for bank in await self.list_banks():
            if wanted in (bank.bank_code, bank.ifsc_prefix):
                return bank
        raise ResourceNotFoundException("bank", code)

    async def _lookup(self, ifsc: str) -> IfscDetails | None:
        if self._ifsc_client is None:
            raise ExternalServiceException("ifsc", "IFSC lookup is not configured")
        return await self._ifsc_client.lookup(ifsc)

    async def validate_ifsc(self, ifsc: str) -> IfscDetails:
        """Branch details for a valid IFSC code.

        Raises:
            ValidationException: Malformed code, or unknown to the directory.
            ExternalServiceException: The directory could not be reached.
        """
        code = normalize_ifsc(ifsc)
        details = await self._cache.fetch(
            keys.bank_ifsc_key(code), _IFSC, lambda: self._lookup(code)
        )
        if details is None:
            raise ValidationException("Invalid IFSC code", "ifsc")
        return details

    async def get_bank_from_ifsc(self, ifsc: str) -> BankResult:
        """The bank an IFSC code belongs to, named as the directory reports it."""
        details = await self.validate_ifsc(ifsc)
        prefix = normalize_ifsc(ifsc)[:4]
        return BankResult(bank_code=prefix, bank_name=details.bank, ifsc_prefix=prefix)
