"""Clients for third-party HTTP services."""

from vendorhub.infrastructure.external.ifsc_client import IfscClient

__all__ = ["IfscClient"]
