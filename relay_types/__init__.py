"""relay_types package initializer

Shared types for the relay device registry: the error taxonomy used by the
device directory and the API, and the relay request builder.
"""

from relay_types.errors import (
    ConflictError,
    DeviceError,
    NotFound,
    StorageUnavailable,
    ValidationError,
)
from relay_types.relay import SAMPLE, RelayData, RelayTriggerRequest, build_trigger_request

__all__ = [
    "ConflictError",
    "DeviceError",
    "NotFound",
    "StorageUnavailable",
    "ValidationError",
    "SAMPLE",
    "RelayData",
    "RelayTriggerRequest",
    "build_trigger_request",
]
