"""DTOs: typed read-models returned by services and stored in the cache (no ORM dependency)."""
