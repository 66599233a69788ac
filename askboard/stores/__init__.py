"""Data stores for persistence and caching.

Stores handle:
- PostgreSQL: DB session, question repository, ORM operations
- Redis / in-memory: caching with TTL

No authorization or cache policy in stores - that belongs in services.
"""
