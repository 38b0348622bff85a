"""VendorHub: vendor-management backend with a read-through Redis cache layer."""
