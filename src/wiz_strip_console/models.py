"""Wire data model for the WiZ light-strip UDP protocol.

Requests and responses are JSON objects exchanged as single datagrams:

.. code-block:: json

    {"id": 1, "method": "setPilot", "params": {"r": 255, "g": 0, "b": 0, "dimming": 75}}
    {"id": 1, "method": "setPilot", "env": "pro", "result": {"success": true}}

The models below are strict pydantic models whose field aliases match the
device's wire names exactly.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import CodecError, OutOfRangeError, ValidationError

# Parameter limits accepted by the firmware
DIMMING_MIN = 10
DIMMING_MAX = 100
SPEED_MIN = 10
SPEED_MAX = 200
CHANNEL_MIN = 0
CHANNEL_MAX = 255

# Identifier the device expects on setPilot requests
PILOT_REQUEST_ID = 1


def _check_range(name: str, value: int, minimum: int, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} value must be an integer, got {value!r}")
    if not minimum <= value <= maximum:
        raise OutOfRangeError(name, value, minimum, maximum)
    return value


def validate_dimming(value: int) -> int:
    """Return *value* if it is a valid dimming percentage, else raise OutOfRangeError."""
    return _check_range("dimming", value, DIMMING_MIN, DIMMING_MAX)


def validate_speed(value: int) -> int:
    """Return *value* if it is a valid scene speed, else raise OutOfRangeError."""
    return _check_range("speed", value, SPEED_MIN, SPEED_MAX)


def validate_channel(name: str, value: int) -> int:
    """Return *value* if it fits in a single color channel byte."""
    return _check_range(name, value, CHANNEL_MIN, CHANNEL_MAX)


class Method(str, Enum):
    """Methods understood by the device."""

    GET_STATE = "getState"
    SET_STATE = "setState"
    GET_PILOT = "getPilot"
    SET_PILOT = "setPilot"


class Scene(IntEnum):
    """Dynamic scene presets. Ordinals are fixed by the device firmware."""

    OCEAN = 1
    ROMANCE = 2
    SUNSET = 3
    PARTY = 4
    FIREPLACE = 5
    COZY = 6
    FOREST = 7
    PASTEL_COLORS = 8
    WAKE_UP = 9
    BEDTIME = 10
    WARM_WHITE = 11
    DAYLIGHT = 12
    COOL_WHITE = 13
    NIGHT_LIGHT = 14
    FOCUS = 15
    RELAX = 16
    TRUE_COLORS = 17
    TV_TIME = 18
    PLANTGROWTH = 19
    SPRING = 20
    SUMMER = 21
    FALL = 22
    DEEPDIVE = 23
    JUNGLE = 24
    MOJITO = 25
    CLUB = 26
    CHRISTMAS = 27
    HALLOWEEN = 28
    CANDLELIGHT = 29
    GOLDEN_WHITE = 30
    PULSE = 31
    STEAMPUNK = 32
    # Music-reactive mode
    RHYTHM = 1000

    @property
    def cli_name(self) -> str:
        """Kebab-case name used on the command line (e.g. ``pastel-colors``)."""
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_name(cls, name: str) -> Scene:
        """Look up a scene by its CLI name, case-insensitively.

        Raises:
            ValueError: If no scene has that name
        """
        key = name.strip().replace("-", "_").upper()
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown scene: {name!r}") from None


class _WireModel(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True, populate_by_name=True)


class EmptyParams(_WireModel):
    """Params of the query methods, sent as ``{}``."""


class StateParams(_WireModel):
    """Power state."""

    state: bool


class ColorParams(_WireModel):
    """Static RGB color at a brightness."""

    red: int = Field(alias="r", ge=CHANNEL_MIN, le=CHANNEL_MAX)
    green: int = Field(alias="g", ge=CHANNEL_MIN, le=CHANNEL_MAX)
    blue: int = Field(alias="b", ge=CHANNEL_MIN, le=CHANNEL_MAX)
    dimming: int = Field(ge=DIMMING_MIN, le=DIMMING_MAX)


class SceneParams(_WireModel):
    """Dynamic scene at a speed and brightness."""

    scene: Scene = Field(alias="sceneId")
    speed: int = Field(ge=SPEED_MIN, le=SPEED_MAX)
    dimming: int = Field(ge=DIMMING_MIN, le=DIMMING_MAX)


ParamsT = TypeVar("ParamsT", bound=BaseModel)
ResultT = TypeVar("ResultT", bound=BaseModel)

# Params shapes each method may carry
PARAMS_BY_METHOD: dict[Method, tuple[type[BaseModel], ...]] = {
    Method.GET_STATE: (EmptyParams,),
    Method.SET_STATE: (StateParams,),
    Method.GET_PILOT: (EmptyParams,),
    Method.SET_PILOT: (ColorParams, SceneParams),
}


class Request(_WireModel, Generic[ParamsT]):
    """Outbound command envelope.

    Always build requests through the classmethods below; they pick the
    identifier and params shape the device expects for each method.
    """

    id: Optional[int] = None
    method: Method
    params: ParamsT

    @model_validator(mode="after")
    def _check_params_match_method(self) -> Request:
        allowed = PARAMS_BY_METHOD[self.method]
        if not isinstance(self.params, allowed):
            raise CodecError(
                f"{type(self.params).__name__} cannot be sent with method {self.method.value}"
            )
        return self

    @classmethod
    def set_state(cls, state: bool) -> Request[StateParams]:
        return Request[StateParams](method=Method.SET_STATE, params=StateParams(state=state))

    @classmethod
    def set_color(cls, red: int, green: int, blue: int, dimming: int) -> Request[ColorParams]:
        return Request[ColorParams](
            id=PILOT_REQUEST_ID,
            method=Method.SET_PILOT,
            params=ColorParams(red=red, green=green, blue=blue, dimming=dimming),
        )

    @classmethod
    def set_scene(cls, scene: Scene, speed: int, dimming: int) -> Request[SceneParams]:
        return Request[SceneParams](
            id=PILOT_REQUEST_ID,
            method=Method.SET_PILOT,
            params=SceneParams(scene=scene, speed=speed, dimming=dimming),
        )

    @classmethod
    def get_pilot(cls) -> Request[EmptyParams]:
        return Request[EmptyParams](method=Method.GET_PILOT, params=EmptyParams())


class CommandResult(_WireModel):
    """Result of setState / setPilot."""

    success: bool


class Status(_WireModel):
    """Telemetry returned by getPilot."""

    mac: str
    rssi: int
    state: bool
    scene_id: int = Field(alias="sceneId")
    r: int = 0
    g: int = 0
    b: int = 0
    c: int = 0
    w: int = 0
    speed: int = 0
    dimming: int


class Response(_WireModel, Generic[ResultT]):
    """Inbound reply envelope. Unknown fields are ignored."""

    id: Optional[int] = None
    method: str
    env: str
    result: ResultT


__all__ = [
    "DIMMING_MIN",
    "DIMMING_MAX",
    "SPEED_MIN",
    "SPEED_MAX",
    "PILOT_REQUEST_ID",
    "validate_dimming",
    "validate_speed",
    "validate_channel",
    "Method",
    "Scene",
    "EmptyParams",
    "StateParams",
    "ColorParams",
    "SceneParams",
    "PARAMS_BY_METHOD",
    "Request",
    "CommandResult",
    "Status",
    "Response",
]
