"""ID and value generators (CUID primary keys, order numbers)."""

import secrets

from cuid2 import cuid_wrapper

from vendorhub.shared.utils.datetime import utc_now

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_order_number() -> str:
    """Return a human-facing order number such as ORD-20250314-8F3A2C."""
    return f"ORD-{utc_now():%Y%m%d}-{secrets.token_hex(3).upper()}"
