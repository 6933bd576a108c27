import logging

import jsonschema
from bson import ObjectId
from jsonschema import FormatChecker
from pydantic import BaseModel
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from device_db import config
from device_db.schema import devices_indexes, devices_jsonschema
from relay_types.errors import ConflictError, NotFound, StorageUnavailable, ValidationError

logger = logging.getLogger(__name__)


class Device(BaseModel):
    uid: str
    data: str
    ip: str
    type: str


def _format_device(doc: dict) -> Device:
    return Device(
        uid=doc.get("uid"),
        data=str(doc.get("data")),
        ip=doc.get("ip"),
        type=doc.get("type"),
    )


def _validate_device(doc: dict):
    try:
        jsonschema.validate(instance=doc, schema=devices_jsonschema(), format_checker=FormatChecker())
    except jsonschema.ValidationError as e:
        raise ValidationError(f"Schema validation error: {e.message}") from e


class DeviceDirectory:
    """Canonical record of known devices, one document per ``uid``.

    Uniqueness is left to the collection's unique index; nothing here
    locks, retries or resolves conflicts.
    """

    def __init__(self, db, collection_name: str = None):
        self.db = db
        self.collection = db[collection_name or config.DEVICE_COLLECTION]

    def ensure_indexes(self):
        try:
            for index in devices_indexes:
                self.collection.create_index(index["keys"], unique=index["unique"])
        except PyMongoError as e:
            raise StorageUnavailable(f"Failed to create device indexes: {e}") from e

    def ping(self):
        try:
            self.db.client.admin.command("ping")
        except PyMongoError as e:
            raise StorageUnavailable(f"db ping failed: {e}") from e

    def register(self, uid: str, ip: str, type: str, data: str) -> Device:
        """Create the device ``uid`` or overwrite its ip, type and data."""
        doc = {"uid": uid, "data": data, "ip": ip, "type": type}
        # drop missing fields so the schema reports them as required
        _validate_device({k: v for k, v in doc.items() if v is not None})
        doc["data"] = ObjectId(data)

        try:
            saved = self.collection.find_one_and_update(
                {"uid": uid},
                {"$set": doc},
                projection={"_id": 0},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            logger.warning("Concurrent registration of device %s lost the insert race", uid)
            raise ConflictError(f"Device {uid} was registered concurrently") from e
        except PyMongoError as e:
            raise StorageUnavailable(f"Failed to register device {uid}: {e}") from e

        logger.info("Registered device %s (%s, %s)", uid, type, ip)
        return _format_device(saved)

    def find(self, uid: str) -> Device:
        # a dict here would reach the query as an operator
        if not isinstance(uid, str) or not uid:
            raise ValidationError("uid is required")
        try:
            doc = self.collection.find_one({"uid": uid}, {"_id": 0})
        except PyMongoError as e:
            raise StorageUnavailable(f"Failed to look up device {uid}: {e}") from e
        if not doc:
            raise NotFound(uid)
        return _format_device(doc)

    def list_devices(self) -> list[Device]:
        try:
            cursor = self.collection.find({}, {"_id": 0}).sort("uid", 1)
            return [_format_device(d) for d in cursor]
        except PyMongoError as e:
            raise StorageUnavailable(f"Failed to list devices: {e}") from e
