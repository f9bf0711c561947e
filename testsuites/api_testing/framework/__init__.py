"""
================================================================================
API Testing Framework
================================================================================

Harness components for the fixture API (users, posts, comments).

Modules:
    - config_loader: YAML configuration with environment overrides
    - http_client: Async HTTP client returning ApiResponse envelopes
    - services: One repository-style service per resource
    - batch_executor: Grouped concurrent creation with cooldowns
    - validators: Stateless response assertions
    - operations: Service calls composed with their validators
    - logger: Injected logging context with scoped child loggers
    - test_data_factory: Seeded payload factories

Author: Automation Team
License: MIT
================================================================================
"""

from .batch_executor import BatchExecutor, BatchItemResult, BatchReport
from .config_loader import ApiSettings, ConfigLoader, ConfigurationError
from .http_client import ApiClient, ApiResponse, HttpClientError, NetworkError, RequestTimeoutError
from .logger import HarnessLogger, ScopedLogger
from .operations import CommentsOperations, ListResult, PostsOperations, UsersOperations
from .services import CommentsApiService, PostsApiService, UsersApiService, ValidationError
from .validators import CommentsValidator, PostsValidator, ResponseAssertionError, UsersValidator

__all__ = [
    "ApiClient",
    "ApiResponse",
    "ApiSettings",
    "BatchExecutor",
    "BatchItemResult",
    "BatchReport",
    "CommentsApiService",
    "CommentsOperations",
    "CommentsValidator",
    "ConfigLoader",
    "ConfigurationError",
    "HarnessLogger",
    "HttpClientError",
    "ListResult",
    "NetworkError",
    "PostsApiService",
    "PostsOperations",
    "PostsValidator",
    "RequestTimeoutError",
    "ResponseAssertionError",
    "ScopedLogger",
    "UsersApiService",
    "UsersOperations",
    "UsersValidator",
    "ValidationError",
]
