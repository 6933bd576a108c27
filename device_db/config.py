# config.py - environment driven settings, read once from .env
import logging
import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "relay_devices")
DEVICE_COLLECTION = os.getenv("DEVICE_COLLECTION", "devices")
MONGO_TLS = _env_flag("MONGO_TLS")
MONGO_TLS_ALLOW_INVALID_CERTS = _env_flag("MONGO_TLS_ALLOW_INVALID_CERTS")
MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
