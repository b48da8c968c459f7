from .connection import ensure_indexes, get_client, get_database, ping

__all__ = ["ensure_indexes", "get_client", "get_database", "ping"]
