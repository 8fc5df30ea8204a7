# -*- coding: utf-8 -*-
# builtin_entity.py

"""
BUILTIN ENTITY KINDS & RECORDS
==============================

The closed registry of entity kinds and the record type that wraps one
recognized occurrence in a text.

Registry
--------
Every kind owns a row in `_KIND_TABLE` (identifier, display name, description,
per-language examples, result examples, supported languages). The table is
the only source of static data; nothing is looked up by reflection.

    BuiltinEntityKind.Duration.identifier          -> "snips/duration"
    BuiltinEntityKind.from_identifier("snips/datetime") -> BuiltinEntityKind.Time
    BuiltinEntityKind.Percentage.supported_languages()  -> DE, EN, ES, FR, JA

Record wire format
------------------
    {
      "value": "1 hour",
      "range": {"start": 17, "end": 23},
      "entity": {"kind": "Duration", "years": 0, ..., "precision": "Exact"},
      "entity_kind": "snips/duration"
    }

`entity_kind` is encoded with the explicit identifier pair
(`identifier` / `from_identifier`) and cross-checked against the `entity`
variant on decode.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import json
from typing import Any, Dict, FrozenSet, List, Mapping, Tuple

from errors import EncodingError, ParsingError, UnknownIdentifier
from language import Language
from ontology import (
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
    is_slot_value,
    slot_value_from_dict,
)

ONTOLOGY_VERSION = "0.1.0"


class BuiltinEntityKind(Enum):
    AmountOfMoney = "AmountOfMoney"
    Duration = "Duration"
    Number = "Number"
    Ordinal = "Ordinal"
    Temperature = "Temperature"
    Time = "Time"
    Percentage = "Percentage"

    @classmethod
    def all(cls) -> Tuple["BuiltinEntityKind", ...]:
        return _ALL_KINDS

    @property
    def identifier(self) -> str:
        return _KIND_TABLE[self].identifier

    @classmethod
    def from_identifier(cls, identifier: str) -> "BuiltinEntityKind":
        for kind in _ALL_KINDS:
            if kind.identifier == identifier:
                return kind
        raise UnknownIdentifier(identifier)

    @property
    def display_name(self) -> str:
        return _KIND_TABLE[self].display_name

    @property
    def description(self) -> str:
        return _KIND_TABLE[self].description

    def examples(self, language: Language) -> Tuple[str, ...]:
        return _KIND_TABLE[self].examples.get(Language.from_code(language), ())

    def supported_languages(self) -> FrozenSet[Language]:
        return _KIND_TABLE[self].languages

    def supports(self, language: Language) -> bool:
        return Language.from_code(language) in _KIND_TABLE[self].languages

    def result_description(self) -> str:
        """Pretty-printed JSON list of representative slot values for this kind."""
        values = _KIND_TABLE[self].result_examples
        try:
            return json.dumps([v.to_dict() for v in values], indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"cannot encode result description of {self.name}: {exc}") from exc

    def __str__(self) -> str:
        return self.identifier


def kind_of(value: SlotValue) -> BuiltinEntityKind:
    """Entity kind implied by a slot value variant (InstantTime -> Time, ...)."""
    return BuiltinEntityKind[value.ENTITY_KIND]


def supported_entity_kinds(language: Language) -> Tuple[BuiltinEntityKind, ...]:
    lang = Language.from_code(language)
    return tuple(k for k in _ALL_KINDS if lang in k.supported_languages())

# =========================
# Static kind table
# =========================
@dataclass(frozen=True)
class _KindInfo:
    identifier: str
    display_name: str
    description: str
    examples: Mapping[Language, Tuple[str, ...]]
    result_examples: Tuple[SlotValue, ...]
    languages: FrozenSet[Language]


_ALL_LANGUAGES = frozenset(Language.all())

_KIND_TABLE: Dict[BuiltinEntityKind, _KindInfo] = {
    BuiltinEntityKind.AmountOfMoney: _KindInfo(
        identifier="snips/amountOfMoney",
        display_name="Amount of money",
        description="Matches amount of money",
        examples={
            Language.DE: ("10$", "ungefähr 5€", "zwei tausend Dollar"),
            Language.EN: ("10$", "around 5€", "ten dollars and five cents"),
            Language.ES: ("10$", "cinco euros", "diez dólares y cinco centavos"),
            Language.FR: ("10$", "environ 5€", "dix dollars et cinq centimes"),
            Language.JA: (),
            Language.KO: ("10$", "약 5 유로", "10 달러 5 센트"),
        },
        result_examples=(
            AmountOfMoneyValue(value=10.05, precision=Precision.Approximate, unit="€"),
        ),
        languages=_ALL_LANGUAGES,
    ),
    BuiltinEntityKind.Duration: _KindInfo(
        identifier="snips/duration",
        display_name="Duration",
        description="Matches time duration",
        examples={
            Language.DE: ("2stdn", "drei monate", "ein halbe Stunde", "8 Jahre und zwei Tage"),
            Language.EN: ("1h", "3 months", "half an hour", "8 years and two days"),
            Language.ES: ("1h", "3 meses"),
            Language.FR: ("1h", "3 mois", "une demi heure", "8 ans et deux jours"),
            Language.JA: (),
            Language.KO: ("양일", "1시간", "3 개월"),
        },
        result_examples=(DurationValue(months=3, precision=Precision.Exact),),
        languages=_ALL_LANGUAGES,
    ),
    BuiltinEntityKind.Number: _KindInfo(
        identifier="snips/number",
        display_name="Number",
        description="Matches a cardinal numbers",
        examples={
            Language.DE: ("2001", "einundzwanzig", "zwei tausend", "zwei tausend und drei"),
            Language.EN: ("2001", "twenty one", "three hundred and four"),
            Language.ES: ("2001", "diez y ocho"),
            Language.FR: ("2001", "vingt deux", "deux cent trois", "quatre vingt dix neuf"),
            Language.JA: ("十二", "二千五", "四千三百二"),
            Language.KO: ("2001", "삼천", "스물 둘", "천 아흔 아홉"),
        },
        result_examples=(NumberValue(value=42.0),),
        languages=_ALL_LANGUAGES,
    ),
    BuiltinEntityKind.Ordinal: _KindInfo(
        identifier="snips/ordinal",
        display_name="Ordinal",
        description="Matches a ordinal numbers",
        examples={
            Language.DE: ("Erste", "der zweite", "zwei und zwanzigster"),
            Language.EN: ("1st", "the second", "the twenty third"),
            Language.ES: ("primer",),
            Language.FR: ("1er", "le deuxième", "vingt et unieme"),
            Language.JA: (),
            Language.KO: ("첫", "첫번째"),
        },
        result_examples=(OrdinalValue(value=2),),
        languages=_ALL_LANGUAGES,
    ),
    BuiltinEntityKind.Temperature: _KindInfo(
        identifier="snips/temperature",
        display_name="Temperature",
        description="Matches a temperature",
        examples={
            Language.DE: ("70K", "3°C", "Dreiundzwanzig Grad", "zweiunddreißig Grad Fahrenheit"),
            Language.EN: ("70K", "3°C", "Twenty three degrees", "one hundred degrees fahrenheit"),
            Language.ES: ("70K", "3°C", "veintitrés grados"),
            Language.FR: ("70K", "3°C", "vingt trois degrés", "deux cent degrés Fahrenheit"),
            Language.JA: (),
            Language.KO: ("5도", "섭씨 20도", "화씨 백 도"),
        },
        result_examples=(
            TemperatureValue(value=23.0, unit="celsius"),
            TemperatureValue(value=60.0, unit="fahrenheit"),
        ),
        languages=_ALL_LANGUAGES,
    ),
    BuiltinEntityKind.Time: _KindInfo(
        identifier="snips/datetime",
        display_name="Date & Time",
        description="Matches date, time, intervals or date and time together",
        examples={
            Language.DE: ("Heute", "16.30 Uhr", "in 1 Stunde", "dritter Dienstag im Juni"),
            Language.EN: ("Today", "4:30 pm", "in 1 hour", "3rd tuesday of June"),
            Language.ES: ("hoy", "esta noche", "a la 1:30", "el primer jueves de junio"),
            Language.FR: ("Aujourd'hui", "à 14:30", "dans 1 heure", "le premier jeudi de Juin"),
            Language.JA: (),
            Language.KO: ("오늘", "14시 30 분에", "5 월 첫째 목요일"),
        },
        result_examples=(
            InstantTimeValue(value="2017-06-13 18:00:00 +02:00", grain=Grain.Hour, precision=Precision.Exact),
            TimeIntervalValue(from_="2017-06-07 18:00:00 +02:00", to="2017-06-08 00:00:00 +02:00"),
        ),
        languages=_ALL_LANGUAGES,
    ),
    BuiltinEntityKind.Percentage: _KindInfo(
        identifier="snips/percentage",
        display_name="Percentage",
        description="Matches a percentage",
        examples={
            Language.DE: ("25%", "zwanzig Prozent", "zwei tausend und fünfzig Prozent"),
            Language.EN: ("25%", "twenty percent", "two hundred and fifty percents"),
            Language.ES: ("25%", "quince porcientos", "20 por ciento"),
            Language.FR: ("25%", "20 pourcents", "quatre vingt dix pourcents"),
            Language.JA: (),
            Language.KO: (),
        },
        result_examples=(PercentageValue(value=20.0),),
        languages=frozenset({Language.DE, Language.EN, Language.ES, Language.FR, Language.JA}),
    ),
}

_ALL_KINDS: Tuple[BuiltinEntityKind, ...] = (
    BuiltinEntityKind.AmountOfMoney,
    BuiltinEntityKind.Duration,
    BuiltinEntityKind.Number,
    BuiltinEntityKind.Ordinal,
    BuiltinEntityKind.Temperature,
    BuiltinEntityKind.Time,
    BuiltinEntityKind.Percentage,
)

# =========================
# Entity record
# =========================
@dataclass(frozen=True)
class Range:
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def to_dict(self) -> Dict[str, int]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class BuiltinEntity:
    value: str
    range: Range
    entity: SlotValue
    entity_kind: BuiltinEntityKind

    def __post_init__(self):
        r = self.range
        if isinstance(r.start, bool) or isinstance(r.end, bool) \
                or not isinstance(r.start, int) or not isinstance(r.end, int):
            raise ValueError(f"range bounds must be integers, got {r!r}")
        if not 0 <= r.start <= r.end:
            raise ValueError(f"invalid range {r.start}..{r.end}")
        if not is_slot_value(self.entity):
            raise ValueError(f"not a slot value: {self.entity!r}")
        if kind_of(self.entity) is not self.entity_kind:
            raise ValueError(
                f"{self.entity.KIND} value does not belong to entity kind {self.entity_kind.identifier}"
            )

    @property
    def span(self) -> Tuple[int, int]:
        return (self.range.start, self.range.end)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "range": self.range.to_dict(),
            "entity": self.entity.to_dict(),
            "entity_kind": self.entity_kind.identifier,
        }

    def to_json(self, **kwargs) -> str:
        kwargs.setdefault("ensure_ascii", False)
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "BuiltinEntity":
        if not isinstance(d, Mapping):
            raise ParsingError(f"builtin entity must be an object, got {type(d).__name__}")
        for key in ("value", "range", "entity", "entity_kind"):
            if key not in d:
                raise ParsingError(f"missing field {key!r} in builtin entity")
        value, rng, kind_id = d["value"], d["range"], d["entity_kind"]
        if not isinstance(value, str):
            raise ParsingError(f"field 'value' must be a string, got {value!r}")
        if not isinstance(rng, Mapping) or "start" not in rng or "end" not in rng:
            raise ParsingError(f"field 'range' must be an object with start/end, got {rng!r}")
        if not isinstance(kind_id, str):
            raise ParsingError(f"field 'entity_kind' must be a string, got {kind_id!r}")
        kind = BuiltinEntityKind.from_identifier(kind_id)
        entity = slot_value_from_dict(d["entity"])
        try:
            return cls(value=value, range=Range(rng["start"], rng["end"]), entity=entity, entity_kind=kind)
        except ValueError as exc:
            raise ParsingError(str(exc)) from exc

    @classmethod
    def from_json(cls, payload: str) -> "BuiltinEntity":
        try:
            data = json.loads(payload)
        except ValueError as exc:
            raise ParsingError(f"invalid JSON: {exc}") from exc
        return cls.from_dict(data)


def entities_to_json(entities: List[BuiltinEntity], **kwargs) -> str:
    kwargs.setdefault("ensure_ascii", False)
    return json.dumps([e.to_dict() for e in entities], **kwargs)

def entities_from_json(payload: str) -> List[BuiltinEntity]:
    try:
        data = json.loads(payload)
    except ValueError as exc:
        raise ParsingError(f"invalid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ParsingError("expected a JSON list of builtin entities")
    return [BuiltinEntity.from_dict(d) for d in data]

# =========================
# Ontology documentation
# =========================
def entity_ontology(language: Language) -> Dict[str, Any]:
    """Documentation payload for one language: every supported kind with its examples."""
    lang = Language.from_code(language)
    return {
        "language": lang.code,
        "entities": [
            {
                "name": kind.display_name,
                "label": kind.identifier,
                "description": kind.description,
                "examples": list(kind.examples(lang)),
                "result_description": kind.result_description(),
            }
            for kind in supported_entity_kinds(lang)
        ],
    }

def complete_entity_ontology() -> Dict[str, Any]:
    return {
        "ontology_version": ONTOLOGY_VERSION,
        "languages": [entity_ontology(lang) for lang in Language.all()],
    }
