from .rest_client import SupabaseRestClient
from .repositories import SupabaseClientRepository, SupabasePullHistoryRepository

__all__ = [
    "SupabaseRestClient",
    "SupabaseClientRepository",
    "SupabasePullHistoryRepository",
]
