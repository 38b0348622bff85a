"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure. Every prefix is also the
namespace used for wildcard invalidation (<prefix>:*).
"""

# Entity namespaces
CACHE_PREFIX_ATTRIBUTES = "attributes"
CACHE_PREFIX_BRANDS = "brands"
CACHE_PREFIX_PARENT_CATEGORIES = "parent_categories"
CACHE_PREFIX_PRIMARY_CATEGORIES = "primary_categories"
CACHE_PREFIX_SECONDARY_CATEGORIES = "secondary_categories"
CACHE_PREFIX_PRODUCTS = "products"
CACHE_PREFIX_VENDOR = "vendor"
CACHE_PREFIX_USERS = "users"
CACHE_PREFIX_DISCOUNTS = "discounts"
CACHE_PREFIX_REFERRALS = "referrals"
CACHE_PREFIX_ORDERS = "orders"
CACHE_PREFIX_DROPDOWN = "dropdown"
CACHE_PREFIX_SIZES = "sizes"
CACHE_PREFIX_BLOG = "blog"
CACHE_PREFIX_BANKS = "banks"

# Dashboard metrics (one prefix per metric, scoped by vendor)
CACHE_PREFIX_SALES = "sales"
CACHE_PREFIX_ORDER_STATUS = "order_status"
CACHE_PREFIX_INVENTORY = "inventory"

# Operation discriminators
CACHE_OP_ALL = "all"
CACHE_OP_ID = "id"
CACHE_OP_PAGINATED = "paginated"
CACHE_OP_EMAIL = "email"
CACHE_OP_CODE = "code"
CACHE_OP_VENDOR = "vendor"
CACHE_OP_ADMIN = "admin"
CACHE_OP_PUBLIC = "public"
CACHE_OP_LIST = "list"
CACHE_OP_STATS = "stats"
CACHE_OP_NUMBER = "number"
CACHE_OP_IFSC = "ifsc"

# Placeholder for an absent optional scope component
CACHE_SCOPE_ANY = "all"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Redis glob metacharacters; never allowed inside an identifier component
CACHE_GLOB_CHARS = frozenset("*?[]")

# Pagination
DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100
DEFAULT_SORT_FIELD = "created_at"

# Inventory
LOW_STOCK_THRESHOLD = 10
TOP_SELLING_PRODUCTS_LIMIT = 5
YEARLY_REVENUE_WINDOW = 5
