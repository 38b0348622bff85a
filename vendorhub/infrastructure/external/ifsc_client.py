"""IFSC directory client (bank branch lookup over HTTPS).

GET <base_url>/<IFSC> returns the branch record as JSON; 404 means the
code does not exist. All calls use httpx.AsyncClient so they do not block
the event loop. Callers cache the results; this client never does.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from vendorhub.application.dtos.bank import IfscDetails
from vendorhub.domain.exceptions import ExternalServiceException

logger = logging.getLogger(__name__)

_SERVICE = "ifsc"


def _text(data: dict[str, Any], field: str) -> str | None:
    value = data.get(field)
    if value is None or value == "":
        return None
    return str(value)


def _to_details(ifsc: str, data: Any) -> IfscDetails:
    if not isinstance(data, dict) or not _text(data, "BANK"):
        raise ExternalServiceException(_SERVICE, "IFSC lookup returned an unexpected payload")
    return IfscDetails(
        ifsc=_text(data, "IFSC") or ifsc,
        bank=_text(data, "BANK") or "",
        branch=_text(data, "BRANCH"),
        address=_text(data, "ADDRESS"),
        city=_text(data, "CITY"),
        district=_text(data, "DISTRICT"),
        state=_text(data, "STATE"),
        bank_code=_text(data, "BANKCODE"),
        micr=_text(data, "MICR"),
        contact=_text(data, "CONTACT"),
    )


class IfscClient:
    """Looks up branch details for an IFSC code."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def lookup(self, ifsc: str) -> IfscDetails | None:
        """Return branch details, or None when the directory does not know the code.

        Raises:
            ExternalServiceException: Network failure, unexpected status or payload.
        """
        try:
            resp = await self._http.get(
                f"{self._base_url}/{ifsc}", headers={"Accept": "application/json"}
            )
        except httpx.HTTPError as e:
            logger.warning("IFSC lookup for %s failed: %s", ifsc, e)
            raise ExternalServiceException(_SERVICE, "IFSC lookup is unavailable") from e
        if resp.status_code == 404:
            return None
        if resp.status_code != 200:
            logger.warning("IFSC lookup for %s returned HTTP %s", ifsc, resp.status_code)
            raise ExternalServiceException(
                _SERVICE, f"IFSC lookup failed with status {resp.status_code}"
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise ExternalServiceException(_SERVICE, "IFSC lookup returned invalid JSON") from e
        return _to_details(ifsc, data)
