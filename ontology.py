# -*- coding: utf-8 -*-
# ontology.py

"""
SLOT VALUE MODEL
================

Typed, normalized payloads of recognized builtin entities. One frozen dataclass
per variant, all serializable to the stable wire format:

  • Number        -> NumberValue(value: float)
  • Ordinal       -> OrdinalValue(value: int)
  • Percentage    -> PercentageValue(value: float)             # "25%" -> 25.0
  • AmountOfMoney -> AmountOfMoneyValue(value, precision, unit)
  • Temperature   -> TemperatureValue(value, unit)
  • Duration      -> DurationValue(years ... seconds, precision)
  • InstantTime   -> InstantTimeValue(value: "2017-06-13 18:00:00 +02:00", grain, precision)
  • TimeInterval  -> TimeIntervalValue(from_, to)               # wire names "from"/"to"

Wire shape: a JSON object whose first key is the `kind` discriminator followed
by the variant fields, e.g.

    {"kind": "Percentage", "value": 20.0}

Each variant also names the entity kind it belongs to (`ENTITY_KIND`, the
member name of `builtin_entity.BuiltinEntityKind`); InstantTime and
TimeInterval both belong to Time.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import math
from typing import Any, Dict, Mapping, Optional, Tuple, Type, Union

from errors import ParsingError


class Precision(Enum):
    Exact = "Exact"
    Approximate = "Approximate"


class Grain(Enum):
    Year = "Year"
    Quarter = "Quarter"
    Month = "Month"
    Week = "Week"
    Day = "Day"
    Hour = "Hour"
    Minute = "Minute"
    Second = "Second"


DURATION_COMPONENTS: Tuple[str, ...] = (
    "years", "quarters", "months", "weeks", "days", "hours", "minutes", "seconds",
)

# =========================
# Field decoding helpers
# =========================
def _field(d: Mapping[str, Any], name: str) -> Any:
    if name not in d:
        raise ParsingError(f"missing field {name!r} in {d.get('kind')!r} value")
    return d[name]

def _float(d: Mapping[str, Any], name: str) -> float:
    v = _field(d, name)
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ParsingError(f"field {name!r} must be a number, got {v!r}")
    return float(v)

def _int(d: Mapping[str, Any], name: str) -> int:
    v = _field(d, name)
    if isinstance(v, bool) or not isinstance(v, int):
        raise ParsingError(f"field {name!r} must be an integer, got {v!r}")
    return v

def _opt_str(d: Mapping[str, Any], name: str) -> Optional[str]:
    v = d.get(name)
    if v is not None and not isinstance(v, str):
        raise ParsingError(f"field {name!r} must be a string or null, got {v!r}")
    return v

def _enum(d: Mapping[str, Any], name: str, enum_cls):
    v = _field(d, name)
    try:
        return enum_cls(v)
    except ValueError:
        raise ParsingError(f"invalid {enum_cls.__name__} {v!r}") from None

# =========================
# Variants
# =========================
@dataclass(frozen=True)
class NumberValue:
    value: float

    KIND = "Number"
    ENTITY_KIND = "Number"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.KIND, "value": float(self.value)}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "NumberValue":
        return cls(value=_float(d, "value"))


@dataclass(frozen=True)
class OrdinalValue:
    value: int

    KIND = "Ordinal"
    ENTITY_KIND = "Ordinal"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.KIND, "value": int(self.value)}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "OrdinalValue":
        return cls(value=_int(d, "value"))


@dataclass(frozen=True)
class PercentageValue:
    value: float

    KIND = "Percentage"
    ENTITY_KIND = "Percentage"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.KIND, "value": float(self.value)}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "PercentageValue":
        return cls(value=_float(d, "value"))


@dataclass(frozen=True)
class AmountOfMoneyValue:
    value: float
    precision: Precision = Precision.Exact
    unit: Optional[str] = None  # "$", "€", "EUR", ...

    KIND = "AmountOfMoney"
    ENTITY_KIND = "AmountOfMoney"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.KIND,
            "value": float(self.value),
            "precision": self.precision.value,
            "unit": self.unit,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "AmountOfMoneyValue":
        return cls(
            value=_float(d, "value"),
            precision=_enum(d, "precision", Precision),
            unit=_opt_str(d, "unit"),
        )


@dataclass(frozen=True)
class TemperatureValue:
    value: float
    unit: Optional[str] = None  # "celsius", "fahrenheit", "kelvin", "degree"

    KIND = "Temperature"
    ENTITY_KIND = "Temperature"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.KIND, "value": float(self.value), "unit": self.unit}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "TemperatureValue":
        return cls(value=_float(d, "value"), unit=_opt_str(d, "unit"))


@dataclass(frozen=True)
class DurationValue:
    years: int = 0
    quarters: int = 0
    months: int = 0
    weeks: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    precision: Precision = Precision.Exact

    KIND = "Duration"
    ENTITY_KIND = "Duration"

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"kind": self.KIND}
        for name in DURATION_COMPONENTS:
            d[name] = int(getattr(self, name))
        d["precision"] = self.precision.value
        return d

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "DurationValue":
        comps = {name: _int(d, name) for name in DURATION_COMPONENTS}
        return cls(precision=_enum(d, "precision", Precision), **comps)


@dataclass(frozen=True)
class InstantTimeValue:
    value: str
    grain: Grain
    precision: Precision = Precision.Exact

    KIND = "InstantTime"
    ENTITY_KIND = "Time"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.KIND,
            "value": self.value,
            "grain": self.grain.value,
            "precision": self.precision.value,
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "InstantTimeValue":
        value = _field(d, "value")
        if not isinstance(value, str):
            raise ParsingError(f"field 'value' must be a string, got {value!r}")
        return cls(
            value=value,
            grain=_enum(d, "grain", Grain),
            precision=_enum(d, "precision", Precision),
        )


@dataclass(frozen=True)
class TimeIntervalValue:
    from_: Optional[str] = None
    to: Optional[str] = None

    KIND = "TimeInterval"
    ENTITY_KIND = "Time"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.KIND, "from": self.from_, "to": self.to}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "TimeIntervalValue":
        from_, to = _opt_str(d, "from"), _opt_str(d, "to")
        if from_ is None and to is None:
            raise ParsingError("TimeInterval needs at least one of 'from'/'to'")
        return cls(from_=from_, to=to)


SlotValue = Union[
    NumberValue, OrdinalValue, PercentageValue, AmountOfMoneyValue,
    TemperatureValue, DurationValue, InstantTimeValue, TimeIntervalValue,
]

_VARIANTS: Dict[str, Type] = {
    cls.KIND: cls
    for cls in (
        NumberValue, OrdinalValue, PercentageValue, AmountOfMoneyValue,
        TemperatureValue, DurationValue, InstantTimeValue, TimeIntervalValue,
    )
}

def slot_value_from_dict(d: Mapping[str, Any]) -> SlotValue:
    if not isinstance(d, Mapping):
        raise ParsingError(f"slot value must be an object, got {type(d).__name__}")
    kind = d.get("kind")
    cls = _VARIANTS.get(kind) if isinstance(kind, str) else None
    if cls is None:
        raise ParsingError(f"unknown slot value kind: {kind!r}")
    return cls.from_dict(d)

def is_slot_value(obj: Any) -> bool:
    return type(obj) in _VARIANTS.values()

def is_finite_number(x: Any) -> bool:
    # bool is a subclass of int, never a number here
    return (isinstance(x, (int, float))
            and not isinstance(x, bool)
            and math.isfinite(x))
