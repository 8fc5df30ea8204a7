# tests/test_builtin_entity.py
import json

import pytest

from builtin_entity import (
    BuiltinEntity,
    BuiltinEntityKind,
    Range,
    complete_entity_ontology,
    entities_from_json,
    entities_to_json,
    entity_ontology,
    kind_of,
    supported_entity_kinds,
)
from errors import ParsingError, UnknownIdentifier
from language import Language
from ontology import Grain, InstantTimeValue, NumberValue, Precision, TimeIntervalValue


# -------------------------
# Small helpers
# -------------------------
def _instant_time_entity() -> BuiltinEntity:
    return BuiltinEntity(
        value="today",
        range=Range(0, 5),
        entity=InstantTimeValue(
            value="2017-06-13 18:00:00 +02:00",
            grain=Grain.Hour,
            precision=Precision.Exact,
        ),
        entity_kind=BuiltinEntityKind.Time,
    )

def _instant_time_dict() -> dict:
    return {
        "value": "today",
        "range": {"start": 0, "end": 5},
        "entity": {
            "kind": "InstantTime",
            "value": "2017-06-13 18:00:00 +02:00",
            "grain": "Hour",
            "precision": "Exact",
        },
        "entity_kind": "snips/datetime",
    }


# ======================
# Registry
# ======================
@pytest.mark.parametrize("kind", BuiltinEntityKind.all())
def test_identifier_round_trip(kind):
    assert BuiltinEntityKind.from_identifier(kind.identifier) is kind

def test_identifiers_are_the_published_ones():
    assert [k.identifier for k in BuiltinEntityKind.all()] == [
        "snips/amountOfMoney",
        "snips/duration",
        "snips/number",
        "snips/ordinal",
        "snips/temperature",
        "snips/datetime",
        "snips/percentage",
    ]

@pytest.mark.parametrize("bad", ["snips/unknown", "", "Number", "SNIPS/NUMBER"])
def test_unknown_identifier_fails(bad):
    with pytest.raises(UnknownIdentifier) as exc:
        BuiltinEntityKind.from_identifier(bad)
    assert exc.value.identifier == bad
    assert isinstance(exc.value, ParsingError)

def test_japanese_has_examples_only_for_numbers():
    with_examples = {k for k in BuiltinEntityKind.all() if k.examples(Language.JA)}
    assert with_examples == {BuiltinEntityKind.Number}
    assert BuiltinEntityKind.Number.examples(Language.JA) == ("十二", "二千五", "四千三百二")

def test_percentage_is_not_supported_in_korean():
    assert Language.KO not in BuiltinEntityKind.Percentage.supported_languages()
    assert BuiltinEntityKind.Percentage not in supported_entity_kinds(Language.KO)
    for kind in BuiltinEntityKind.all():
        if kind is not BuiltinEntityKind.Percentage:
            assert kind.supported_languages() == frozenset(Language.all())

def test_examples_accept_language_codes():
    assert BuiltinEntityKind.Duration.examples("en") == ("1h", "3 months", "half an hour", "8 years and two days")


# ======================
# Result descriptions
# ======================
def test_percentage_result_description_exact_text():
    assert BuiltinEntityKind.Percentage.result_description() == (
        "[\n  {\n    \"kind\": \"Percentage\",\n    \"value\": 20.0\n  }\n]"
    )

def test_duration_result_description_lists_every_component():
    [d] = json.loads(BuiltinEntityKind.Duration.result_description())
    assert d == {
        "kind": "Duration", "years": 0, "quarters": 0, "months": 3, "weeks": 0,
        "days": 0, "hours": 0, "minutes": 0, "seconds": 0, "precision": "Exact",
    }

def test_time_result_description_has_instant_and_interval():
    values = json.loads(BuiltinEntityKind.Time.result_description())
    assert [v["kind"] for v in values] == ["InstantTime", "TimeInterval"]
    assert values[1] == {
        "kind": "TimeInterval",
        "from": "2017-06-07 18:00:00 +02:00",
        "to": "2017-06-08 00:00:00 +02:00",
    }

@pytest.mark.parametrize("kind", BuiltinEntityKind.all())
def test_every_result_description_is_a_json_list(kind):
    values = json.loads(kind.result_description())
    assert isinstance(values, list) and values
    assert all("kind" in v for v in values)


# ======================
# Entity records
# ======================
def test_entity_serializes_to_wire_format():
    assert _instant_time_entity().to_dict() == _instant_time_dict()

def test_entity_round_trip_through_json():
    ent = _instant_time_entity()
    assert BuiltinEntity.from_json(ent.to_json()) == ent
    assert entities_from_json(entities_to_json([ent, ent])) == [ent, ent]

def test_decoding_rejects_kind_mismatch():
    d = _instant_time_dict()
    d["entity_kind"] = "snips/number"
    with pytest.raises(ParsingError):
        BuiltinEntity.from_dict(d)

def test_decoding_rejects_unknown_kind_identifier():
    d = _instant_time_dict()
    d["entity_kind"] = "snips/whatever"
    with pytest.raises(UnknownIdentifier):
        BuiltinEntity.from_dict(d)

@pytest.mark.parametrize("payload", ["not json", "{}", "[1, 2]", '{"value": "x"}'])
def test_decoding_garbage_raises_parsing_error(payload):
    with pytest.raises(ParsingError):
        if payload.startswith("["):
            entities_from_json(payload)
        else:
            BuiltinEntity.from_json(payload)

def test_entity_constructor_checks_kind_and_range():
    with pytest.raises(ValueError):
        BuiltinEntity("x", Range(0, 1), NumberValue(1.0), BuiltinEntityKind.Time)
    with pytest.raises(ValueError):
        BuiltinEntity("x", Range(3, 1), NumberValue(1.0), BuiltinEntityKind.Number)

def test_kind_of_maps_time_variants_to_time():
    assert kind_of(TimeIntervalValue(to="2017-06-08 00:00:00 +02:00")) is BuiltinEntityKind.Time
    assert kind_of(NumberValue(3.0)) is BuiltinEntityKind.Number


# ======================
# Ontology documentation
# ======================
def test_entity_ontology_for_korean_skips_percentage():
    doc = entity_ontology(Language.KO)
    assert doc["language"] == "ko"
    labels = [e["label"] for e in doc["entities"]]
    assert "snips/percentage" not in labels
    assert labels[0] == "snips/amountOfMoney"
    money = doc["entities"][0]
    assert money["name"] == "Amount of money"
    assert money["examples"] == ["10$", "약 5 유로", "10 달러 5 센트"]

def test_complete_ontology_covers_every_language():
    doc = complete_entity_ontology()
    assert doc["ontology_version"] == "0.1.0"
    assert [d["language"] for d in doc["languages"]] == ["de", "en", "es", "fr", "ja", "ko"]
