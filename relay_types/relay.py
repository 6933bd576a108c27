from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from relay_types.errors import ValidationError


TRIGGER_GPIO = 1
TRIGGER_ACTION = "trigger"


class RelayData(BaseModel):
    """State kept for a relay device between signals."""

    last_signal_timestamp: int = Field(default=0, ge=0, description="Epoch milliseconds, 0 if never signalled")


SAMPLE = RelayData(last_signal_timestamp=0)


class RelayTriggerRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    uid: str = Field(min_length=1)
    gpio: Literal[1] = TRIGGER_GPIO
    action: Literal["trigger"] = TRIGGER_ACTION


def build_trigger_request(uid) -> RelayTriggerRequest:
    """Build the payload that tells device ``uid`` to pulse GPIO pin 1.

    Pure function: the result only depends on ``uid``.
    """
    if not isinstance(uid, str) or not uid:
        raise ValidationError("uid is required to build a trigger request")
    return RelayTriggerRequest(uid=uid, gpio=TRIGGER_GPIO, action=TRIGGER_ACTION)
