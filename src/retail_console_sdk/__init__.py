from .api import ConsoleApi
from .config import ClientConfig, ConfigError, load_config
from .data_provider import DataProvider
from .exceptions import (
    ApiError,
    AuthExpiredError,
    DecodeError,
    ErrorKind,
    HttpStatusError,
    LoginRejectedError,
    NetworkError,
    RequestTimeoutError,
    ResourceNotFoundError,
)
from .http_client import HttpClient
from .logging_utils import LogHistoryHandler, configure_logging
from .models import (
    HttpMethod,
    ListFilter,
    ListRequest,
    ListResult,
    Pagination,
    RequestDescriptor,
    UserIdentity,
)
from .resources import RESOURCE_REGISTRY, ResourceMapping, ResourceName, resolve
from .retry import RetryPolicy
from .session import Session, SessionStore
from .storage import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "AuthExpiredError",
    "ClientConfig",
    "ConfigError",
    "ConsoleApi",
    "DataProvider",
    "DecodeError",
    "ErrorKind",
    "FileKeyValueStore",
    "HttpClient",
    "HttpMethod",
    "HttpStatusError",
    "LoginRejectedError",
    "KeyValueStore",
    "ListFilter",
    "ListRequest",
    "ListResult",
    "LogHistoryHandler",
    "MemoryKeyValueStore",
    "NetworkError",
    "Pagination",
    "RESOURCE_REGISTRY",
    "RequestDescriptor",
    "RequestTimeoutError",
    "ResourceMapping",
    "ResourceName",
    "ResourceNotFoundError",
    "RetryPolicy",
    "Session",
    "SessionStore",
    "UserIdentity",
    "configure_logging",
    "load_config",
    "resolve",
]
