from ffxiv_tracker.clients.http_client import HttpClient
from ffxiv_tracker.clients.ff14_client import FF14ApiClient, create_ff14_api_client

__all__ = [
    "HttpClient",
    "FF14ApiClient",
    "create_ff14_api_client",
]
