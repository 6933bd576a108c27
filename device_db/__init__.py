"""device_db package initializer

MongoDB-backed device directory: connection handling, the ``devices``
collection schema and the register/find operations on top of it.
"""

from device_db.connect_db import connect, get_database
from device_db.directory import Device, DeviceDirectory

__all__ = [
    "Device",
    "DeviceDirectory",
    "connect",
    "get_database",
]
