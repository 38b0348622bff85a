"""Infrastructure: Redis cache, SQLAlchemy persistence and external HTTP clients."""
