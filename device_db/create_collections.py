import logging

from pymongo.errors import CollectionInvalid, OperationFailure

from device_db import config
from device_db.connect_db import get_database
from device_db.schema import devices_indexes, devices_schema

logger = logging.getLogger(__name__)


def create_collections(db, name: str = None):
    name = name or config.DEVICE_COLLECTION

    try:
        db.create_collection(name)
        logger.info("Created collection '%s'", name)
    except CollectionInvalid:
        logger.info("Collection '%s' already exists", name)

    try:
        db.command("collMod", name, validator={"$jsonSchema": devices_schema})
        logger.info("Applied validator to '%s'", name)
    except OperationFailure as e:
        # collMod needs dbAdmin; the unique index below still protects uid
        logger.warning("Failed to apply validator to '%s': %s", name, e)

    for index in devices_indexes:
        index_name = db[name].create_index(index["keys"], unique=index["unique"])
        logger.info("Ensured index '%s' on '%s'", index_name, name)


if __name__ == "__main__":
    config.configure_logging()
    create_collections(get_database())
