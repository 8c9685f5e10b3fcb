"""BuildConfig operations.

Client-side operation object for BuildConfig resources:
- instantiate a build from a BuildRequest
- stream a local file or byte stream as a binary build input
- fire webhook triggers
- delete a build config together with the builds it spawned
"""

__version__ = "0.1.0"

from buildconfig_operations.context import ParameterContext, TimeoutUnit
from buildconfig_operations.errors import (
    ApiError,
    BuildClientError,
    ConfigurationError,
    ReapError,
    SerializationError,
    TransportError,
    UploadError,
)
from buildconfig_operations.operations import BuildConfigOperations

__all__ = [
    "__version__",
    "ApiError",
    "BuildClientError",
    "BuildConfigOperations",
    "ConfigurationError",
    "ParameterContext",
    "ReapError",
    "SerializationError",
    "TimeoutUnit",
    "TransportError",
    "UploadError",
]
