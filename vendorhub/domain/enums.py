"""Domain enumerations for the VendorHub application.

Enums represent fixed sets of domain values (order status, discount kinds,
sort direction).
"""

from enum import Enum


class OrderStatus(str, Enum):
    """Order lifecycle status as reported on the vendor dashboard."""

    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    RETURNED = "returned"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [status.value for status in cls]


class DiscountType(str, Enum):
    """How a discount value is applied."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


class DiscountTargetType(str, Enum):
    """What a discount applies to."""

    CATEGORY = "category"


class SortOrder(str, Enum):
    """Sort direction for paginated listings."""

    ASC = "asc"
    DESC = "desc"
