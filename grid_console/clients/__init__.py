from grid_console.clients.auth_client import AuthClient, SessionStatus
from grid_console.clients.auth_store import AuthStore
from grid_console.clients.errors import ApiError, ErrorKind
from grid_console.clients.http_client import GatewayResult, HttpClient
from grid_console.clients.normalizers import PageResult, normalize_listing, normalize_options
from grid_console.clients.resources_client import ResourceClient

__all__ = [
    "ApiError",
    "AuthClient",
    "AuthStore",
    "ErrorKind",
    "GatewayResult",
    "HttpClient",
    "PageResult",
    "ResourceClient",
    "SessionStatus",
    "normalize_listing",
    "normalize_options",
]
