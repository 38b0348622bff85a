"""DTOs for banks and IFSC branch lookups."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BankResult:
    """A bank as offered in payout forms; ifsc_prefix is the first four IFSC characters."""

    bank_code: str
    bank_name: str
    ifsc_prefix: str


@dataclass(frozen=True)
class IfscDetails:
    """Branch details for one IFSC code, as returned by the IFSC directory."""

    ifsc: str
    bank: str
    branch: str | None = None
    address: str | None = None
    city: str | None = None
    district: str | None = None
    state: str | None = None
    bank_code: str | None = None
    micr: str | None = None
    contact: str | None = None
