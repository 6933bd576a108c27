# errors.py


class DeviceError(Exception):
    """Base class for every error raised by the device registry."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DeviceError):
    """A required field is missing, empty or malformed."""


class ConflictError(DeviceError):
    """The unique ``uid`` index rejected a concurrent first insert."""


class NotFound(DeviceError):
    def __init__(self, uid: str):
        super().__init__(f"Device not found: {uid}")
        self.uid = uid


class StorageUnavailable(DeviceError):
    """The database could not be reached or the driver failed."""
