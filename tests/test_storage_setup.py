"""
Tests for connecting to MongoDB and bootstrapping the devices collection.
"""

import re
from unittest.mock import MagicMock, patch

import pytest
from pymongo.errors import CollectionInvalid, OperationFailure, ServerSelectionTimeoutError

from device_db.connect_db import connect, get_database
from device_db.create_collections import create_collections
from device_db.schema import bson_to_jsonschema, devices_jsonschema, devices_schema
from relay_types.errors import StorageUnavailable


class TestGetDatabase:

    def test_returns_named_database_after_ping(self):
        with patch("device_db.connect_db.MongoClient") as mock_client:
            db = get_database("mongodb://example:27017", "registry")

        mock_client.return_value.admin.command.assert_called_once_with("ping")
        mock_client.return_value.__getitem__.assert_called_once_with("registry")
        assert db is mock_client.return_value.__getitem__.return_value

    def test_unreachable_server_raises(self):
        with patch("device_db.connect_db.MongoClient") as mock_client:
            mock_client.return_value.admin.command.side_effect = ServerSelectionTimeoutError("timed out")

            with pytest.raises(StorageUnavailable):
                get_database("mongodb://example:27017", "registry")

    def test_connect_ensures_uid_index(self, mongo_db):
        with patch("device_db.connect_db.get_database", return_value=mongo_db):
            directory = connect()

        assert "uid_1" in directory.collection.index_information()


class TestCreateCollections:

    def test_creates_collection_validator_and_index(self):
        db = MagicMock()

        create_collections(db, "devices")

        db.create_collection.assert_called_once_with("devices")
        db.command.assert_called_once_with("collMod", "devices", validator={"$jsonSchema": devices_schema})
        db["devices"].create_index.assert_called_once_with([("uid", 1)], unique=True)

    def test_existing_collection_and_denied_validator_still_index(self):
        db = MagicMock()
        db.create_collection.side_effect = CollectionInvalid("collection devices already exists")
        db.command.side_effect = OperationFailure("not authorized")

        create_collections(db, "devices")

        db["devices"].create_index.assert_called_once_with([("uid", 1)], unique=True)


class TestSchema:

    def test_devices_jsonschema(self):
        schema = devices_jsonschema()

        assert schema["required"] == ["uid", "data", "ip", "type"]
        assert schema["properties"]["uid"] == {"type": "string", "minLength": 1}
        assert schema["properties"]["data"]["type"] == "string"
        assert "pattern" in schema["properties"]["data"]

    def test_object_id_pattern_is_anchored_lower_hex(self):
        pattern = devices_jsonschema()["properties"]["data"]["pattern"]

        assert re.search(pattern, "65f1c0ffee0000000000beef")
        assert not re.search(pattern, "65f1c0ffee0000000000beef\n")
        assert not re.search(pattern, "65F1C0FFEE0000000000BEEF")

    def test_unsupported_bson_type_rejected(self):
        with pytest.raises(ValueError):
            bson_to_jsonschema({"properties": {"count": {"bsonType": "int"}}})
