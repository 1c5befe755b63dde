"""Traktor FX unit event payloads accepted by the display state server."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "FX_UNIT_IDS",
    "FxEventKind",
    "FxName",
    "FxParam",
    "ValueRange",
    "fx_endpoint",
    "fx_event_body",
]

FX_UNIT_IDS = range(1, 5)


class FxEventKind(str, Enum):
    """Envelope key naming which FX unit property changed."""

    TYPE = "Type"
    SELECT = "Select"
    DRY_WET = "DryWet"
    KNOB = "Knob"
    NAME = "Name"
    PARAM = "Param"


class _TraktorModel(BaseModel):
    """Base for models mirroring Traktor's camelCase property dumps."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ValueRange(_TraktorModel):
    """Range descriptor of a Traktor property.

    Bounds are empty strings for free-form ("Full") properties. The default
    stays an integer on the wire.
    """

    min: float | str
    max: float | str
    default: int | str = Field(alias="def")
    steps: int
    range_type: str = Field(alias="type")
    is_full: bool = Field(alias="isFull")
    is_continuous: bool = Field(alias="isContinuous")
    is_discrete: bool = Field(alias="isDiscrete")


class FxParam(_TraktorModel):
    """Numeric property of an FX unit (type, select, dry/wet, knob, parameter).

    Attributes:
        path: Traktor property path, e.g. app.traktor.fx.1.knobs.2.
        value: Current value.
        description: Human readable value.
        enabled: Whether the property is active.
        value_range: Allowed value range.
        values_description: Labels for discrete values.
    """

    path: str
    value: float
    description: str
    enabled: bool
    value_range: ValueRange = Field(alias="valueRange")
    values_description: list[str] = Field(default_factory=list, alias="valuesDescription")
    object_name: str = Field(default="", alias="objectName")


class FxName(_TraktorModel):
    """Name of a knob in an FX unit."""

    path: str
    value: str
    description: str
    enabled: bool


def fx_endpoint(unit_id: int) -> str:
    """Return the endpoint for an FX unit.

    Raises:
        ValueError: If unit_id is not 1-4.
    """
    if unit_id not in FX_UNIT_IDS:
        raise ValueError(f"FX unit id must be between 1 and 4 (got: {unit_id})")
    return f"fx/{unit_id}"


def fx_event_body(kind: FxEventKind, param: FxParam | FxName) -> dict[str, Any]:
    """Wrap a property in the single-key envelope the server expects.

    Raises:
        ValueError: If the property model does not match the event kind.
    """
    expected = FxName if kind is FxEventKind.NAME else FxParam
    if not isinstance(param, expected):
        raise ValueError(f"{kind.value} events carry {expected.__name__}, got {type(param).__name__}")
    return {kind.value: param.model_dump(mode="json", by_alias=True)}
