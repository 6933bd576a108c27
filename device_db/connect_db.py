# connect_db.py
import logging

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from device_db import config
from device_db.directory import DeviceDirectory
from relay_types.errors import StorageUnavailable

logger = logging.getLogger(__name__)


def get_database(uri: str = None, db_name: str = None):
    """Open a client, ping the server and return the configured database.

    Raises StorageUnavailable if the server cannot be reached.
    """
    uri = uri or config.MONGO_URI
    db_name = db_name or config.DB_NAME
    try:
        client = MongoClient(
            uri,
            serverSelectionTimeoutMS=config.MONGO_TIMEOUT_MS,
            tls=config.MONGO_TLS,
            tlsAllowInvalidCertificates=config.MONGO_TLS_ALLOW_INVALID_CERTS,
        )

        # Test the connection
        client.admin.command("ping")
    except PyMongoError as e:
        logger.error("Failed to connect to MongoDB: %s", e)
        raise StorageUnavailable(f"MongoDB unreachable: {e}") from e

    db = client[db_name]
    logger.info("Connected to MongoDB database: %s", db_name)
    return db


def connect(uri: str = None, db_name: str = None) -> DeviceDirectory:
    """Connect once at process start and make sure the uid index exists."""
    directory = DeviceDirectory(get_database(uri, db_name))
    directory.ensure_indexes()
    return directory


if __name__ == "__main__":
    config.configure_logging()
    connect()
