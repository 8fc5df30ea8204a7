# -*- coding: utf-8 -*-
# conversion.py

"""
CONVERSION LAYER
================

Turns loosely-typed engine matches (`RawMatch`) into typed slot values and
`BuiltinEntity` records.

A raw match carries:
  • entity_kind : the kind the engine claims (BuiltinEntityKind or its identifier)
  • output      : the engine's raw output tag, one of
                  integer | float | ordinal | percentage | amount_of_money |
                  temperature | duration | datetime | datetime_interval
  • start/end   : span into the parsed text
  • fields      : output-specific raw fields (value, unit, precision, period,
                  moment, grain, from, to)

Normalization rules
-------------------
  • precision: "approximate"/"exact" map directly, missing -> Exact
  • duration : every component defaults to 0, negatives are rejected
  • units    : blank or missing -> None
  • time     : moments must carry a UTC offset; rendered "YYYY-MM-DD HH:MM:SS +HH:MM"
  • interval : at least one of from/to
  • the produced variant must belong to the declared kind

Anything malformed raises `ConversionError`; nothing else escapes
`convert_match`, so callers can drop one match and keep the rest.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Union
import regex as re

import logging
logger = logging.getLogger(__name__)

from builtin_entity import BuiltinEntity, BuiltinEntityKind, Range, kind_of
from errors import ConversionError, UnknownIdentifier
from ontology import (
    DURATION_COMPONENTS,
    AmountOfMoneyValue,
    DurationValue,
    Grain,
    InstantTimeValue,
    NumberValue,
    OrdinalValue,
    PercentageValue,
    Precision,
    SlotValue,
    TemperatureValue,
    TimeIntervalValue,
    is_finite_number,
)


@dataclass(frozen=True)
class RawMatch:
    entity_kind: Union[BuiltinEntityKind, str]
    output: str
    start: int
    end: int
    fields: Mapping[str, Any] = field(default_factory=dict)
    source: str = "engine"

    @property
    def span(self):
        return (self.start, self.end)

# =========================
# Field normalizers
# =========================
def parse_precision(raw: Any) -> Precision:
    if raw is None:
        return Precision.Exact
    if isinstance(raw, Precision):
        return raw
    if isinstance(raw, str):
        norm = raw.strip().lower()
        if norm == "exact":
            return Precision.Exact
        if norm == "approximate":
            return Precision.Approximate
    raise ConversionError(f"unknown precision flag {raw!r}")

_GRAINS_BY_NAME: Dict[str, Grain] = {g.value.lower(): g for g in Grain}

def parse_grain(raw: Any) -> Grain:
    if isinstance(raw, Grain):
        return raw
    if isinstance(raw, str) and raw.strip().lower() in _GRAINS_BY_NAME:
        return _GRAINS_BY_NAME[raw.strip().lower()]
    raise ConversionError(f"unknown grain {raw!r}")

def normalize_unit(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ConversionError(f"unit must be a string, got {raw!r}")
    unit = raw.strip()
    return unit or None

def _number(fields: Mapping[str, Any], name: str = "value") -> float:
    v = fields.get(name)
    if not is_finite_number(v):
        raise ConversionError(f"field {name!r} must be a finite number, got {v!r}")
    return float(v)

def _count(raw: Any, name: str) -> int:
    if raw is None:
        return 0
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ConversionError(f"duration component {name!r} must be an integer, got {raw!r}")
    if isinstance(raw, float) and not raw.is_integer():
        raise ConversionError(f"duration component {name!r} must be an integer, got {raw!r}")
    if raw < 0:
        raise ConversionError(f"negative duration component {name}={raw}")
    return int(raw)

_MOMENT_RX = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[T ](?P<time>\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?)\s*(?P<tz>Z|[+-]\d{2}:?\d{2})$"
)

def format_moment(raw: Any) -> str:
    """Render an aware datetime (or offset-bearing ISO-like string) as 'YYYY-MM-DD HH:MM:SS +HH:MM'."""
    if isinstance(raw, datetime):
        dt = raw
    elif isinstance(raw, str):
        m = _MOMENT_RX.match(raw.strip())
        if not m:
            raise ConversionError(f"timestamp {raw!r} is not a fully qualified moment with offset")
        tz = m.group("tz")
        if tz == "Z":
            tz = "+00:00"
        elif ":" not in tz:
            tz = tz[:3] + ":" + tz[3:]
        try:
            dt = datetime.fromisoformat(f"{m.group('date')}T{m.group('time')}{tz}")
        except ValueError as exc:
            raise ConversionError(f"invalid timestamp {raw!r}: {exc}") from exc
    else:
        raise ConversionError(f"moment must be a datetime or a string, got {raw!r}")

    offset = dt.utcoffset()
    if offset is None:
        raise ConversionError(f"moment {raw!r} has no UTC offset")
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    hh, mm = divmod(abs(total) // 60, 60)
    return f"{dt.strftime('%Y-%m-%d %H:%M:%S')} {sign}{hh:02d}:{mm:02d}"

# =========================
# Per-output converters
# =========================
def _convert_number(f: Mapping[str, Any]) -> SlotValue:
    return NumberValue(value=_number(f))

def _convert_ordinal(f: Mapping[str, Any]) -> SlotValue:
    v = f.get("value")
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    if isinstance(v, bool) or not isinstance(v, int):
        raise ConversionError(f"ordinal value must be an integer, got {v!r}")
    return OrdinalValue(value=v)

def _convert_percentage(f: Mapping[str, Any]) -> SlotValue:
    return PercentageValue(value=_number(f))

def _convert_money(f: Mapping[str, Any]) -> SlotValue:
    return AmountOfMoneyValue(
        value=_number(f),
        precision=parse_precision(f.get("precision")),
        unit=normalize_unit(f.get("unit")),
    )

def _convert_temperature(f: Mapping[str, Any]) -> SlotValue:
    return TemperatureValue(value=_number(f), unit=normalize_unit(f.get("unit")))

def _convert_duration(f: Mapping[str, Any]) -> SlotValue:
    period = f.get("period", f)
    if not isinstance(period, Mapping):
        raise ConversionError(f"duration period must be a mapping, got {period!r}")
    comps = {name: _count(period.get(name), name) for name in DURATION_COMPONENTS}
    return DurationValue(precision=parse_precision(f.get("precision")), **comps)

def _convert_datetime(f: Mapping[str, Any]) -> SlotValue:
    if f.get("moment") is None:
        raise ConversionError("datetime match without a moment")
    return InstantTimeValue(
        value=format_moment(f["moment"]),
        grain=parse_grain(f.get("grain")),
        precision=parse_precision(f.get("precision")),
    )

def _convert_interval(f: Mapping[str, Any]) -> SlotValue:
    lo, hi = f.get("from"), f.get("to")
    if lo is None and hi is None:
        raise ConversionError("time interval without any bound")
    return TimeIntervalValue(
        from_=format_moment(lo) if lo is not None else None,
        to=format_moment(hi) if hi is not None else None,
    )

_CONVERTERS: Dict[str, Callable[[Mapping[str, Any]], SlotValue]] = {
    "integer": _convert_number,
    "float": _convert_number,
    "ordinal": _convert_ordinal,
    "percentage": _convert_percentage,
    "amount_of_money": _convert_money,
    "temperature": _convert_temperature,
    "duration": _convert_duration,
    "datetime": _convert_datetime,
    "datetime_interval": _convert_interval,
}

def declared_kind(match: RawMatch) -> BuiltinEntityKind:
    k = match.entity_kind
    if isinstance(k, BuiltinEntityKind):
        return k
    if isinstance(k, str):
        try:
            return BuiltinEntityKind.from_identifier(k)
        except UnknownIdentifier as exc:
            raise ConversionError(str(exc), match) from exc
    raise ConversionError(f"invalid entity kind tag {k!r}", match)

def convert_slot_value(match: RawMatch) -> SlotValue:
    kind = declared_kind(match)
    conv = _CONVERTERS.get(match.output)
    if conv is None:
        raise ConversionError(f"unknown engine output {match.output!r}", match)
    if not isinstance(match.fields, Mapping):
        raise ConversionError(f"match fields must be a mapping, got {match.fields!r}", match)
    try:
        value = conv(match.fields)
    except ConversionError as exc:
        if exc.match is None:
            exc.match = match
        raise
    except (TypeError, ValueError, AttributeError, OverflowError) as exc:
        raise ConversionError(f"malformed {match.output} match: {exc}", match) from exc
    if kind_of(value) is not kind:
        raise ConversionError(
            f"engine declared {kind.identifier} but produced a {value.KIND} value", match
        )
    return value

def convert_match(text: str, match: RawMatch) -> BuiltinEntity:
    """Validate the span of `match` against `text` and build the entity record."""
    start, end = match.start, match.end
    if isinstance(start, bool) or isinstance(end, bool) \
            or not isinstance(start, int) or not isinstance(end, int):
        raise ConversionError(f"span bounds must be integers, got {match.span!r}", match)
    if not 0 <= start <= end <= len(text):
        raise ConversionError(f"span {start}..{end} outside text of length {len(text)}", match)
    value = convert_slot_value(match)
    entity = BuiltinEntity(
        value=text[start:end],
        range=Range(start, end),
        entity=value,
        entity_kind=kind_of(value),
    )
    logger.debug("conversion: %s %r -> %r", entity.entity_kind.identifier, entity.value, value)
    return entity
