import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, status
from pydantic import BaseModel, Field

from device_db import config
from device_db.connect_db import connect
from device_db.directory import DeviceDirectory
from relay_types.errors import ConflictError, DeviceError, NotFound, StorageUnavailable, ValidationError
from relay_types.relay import RelayTriggerRequest, build_trigger_request

logger = logging.getLogger(__name__)

_directory: Optional[DeviceDirectory] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _directory
    config.configure_logging()
    # StorageUnavailable here aborts startup
    _directory = connect()
    yield
    _directory.db.client.close()
    _directory = None


app = FastAPI(title="Relay Device Registry API (Mongo)", version="1.0.0", lifespan=lifespan)


def db_conn():
    if _directory is None:
        raise HTTPException(status_code=503, detail="Database not connected")
    yield _directory


# ======== Schemas ========
class DeviceIn(BaseModel):
    uid: str = Field(min_length=1, max_length=128)
    ip: str = Field(min_length=1, max_length=64)
    type: str = Field(min_length=1, max_length=64)
    data: str = Field(description="ObjectId of the device's data record")


class DeviceOut(BaseModel):
    uid: str
    ip: str
    type: str
    data: str


# ======== Error mapping ========
_STATUS_BY_ERROR = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    StorageUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _http_error(e: DeviceError) -> HTTPException:
    code = _STATUS_BY_ERROR.get(type(e), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if code >= 500:
        logger.error("Device registry failure: %s", e.message)
    return HTTPException(status_code=code, detail=e.message)


# ======== Devices ========
@app.post("/devices", response_model=DeviceOut, tags=["Devices"])
def register_device(payload: DeviceIn, directory: DeviceDirectory = Depends(db_conn)):
    try:
        device = directory.register(payload.uid, payload.ip, payload.type, payload.data)
    except DeviceError as e:
        raise _http_error(e)
    return DeviceOut(**device.model_dump())


@app.get("/devices", response_model=list[DeviceOut], tags=["Devices"])
def list_devices(directory: DeviceDirectory = Depends(db_conn)):
    try:
        devices = directory.list_devices()
    except DeviceError as e:
        raise _http_error(e)
    return [DeviceOut(**d.model_dump()) for d in devices]


@app.get("/devices/{uid}", response_model=DeviceOut, tags=["Devices"])
def get_device(uid: str, directory: DeviceDirectory = Depends(db_conn)):
    try:
        device = directory.find(uid)
    except DeviceError as e:
        raise _http_error(e)
    return DeviceOut(**device.model_dump())


@app.post("/devices/{uid}/trigger", response_model=RelayTriggerRequest, tags=["Relay"])
def trigger_request(uid: str, directory: DeviceDirectory = Depends(db_conn)):
    """Build the trigger payload for a registered device. Nothing is sent."""
    try:
        device = directory.find(uid)
        return build_trigger_request(device.uid)
    except DeviceError as e:
        raise _http_error(e)


@app.get("/health", response_model=dict, tags=["Health"])
def health(directory: DeviceDirectory = Depends(db_conn)):
    # Simple ping
    try:
        directory.ping()
    except StorageUnavailable as e:
        raise _http_error(e)
    return {"status": "ok"}
