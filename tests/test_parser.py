# tests/test_parser.py
import logging
import threading
import time
from datetime import datetime

import pytest

import builtin_entity_parser
from builtin_entity import BuiltinEntityKind, Range
from builtin_entity_parser import (
    BuiltinEntityParser,
    EngineCache,
    ExtractionResult,
    drop_nested_numbers,
    extract,
)
from conversion import RawMatch
from errors import ConversionError, EngineError, UnknownIdentifier, UnsupportedLanguageError
from extractor import ParserConfig
from language import Language
from ontology import DurationValue, NumberValue, PercentageValue

K = BuiltinEntityKind
FIXED = ParserConfig(reference_time=datetime(2024, 7, 24, 10, 0))


# -------------------------
# Fake engines
# -------------------------
class FakeEngine:
    def __init__(self, matches):
        self.matches = list(matches)
        self.calls = 0

    def parse(self, text):
        self.calls += 1
        return list(self.matches)

class BrokenEngine:
    def parse(self, text):
        raise RuntimeError("boom")

def _parser(matches, language=Language.EN, **cfg):
    engine = FakeEngine(matches)
    return BuiltinEntityParser(language, engine=engine, config=ParserConfig(**cfg)), engine

def _num(start, end, value):
    return RawMatch(K.Number, "integer", start, end, {"value": value})


# ======================
# Ordering
# ======================
def test_longer_match_comes_first_at_same_start():
    text = "in three hours"
    parser, _ = _parser([
        RawMatch(K.Number, "integer", 3, 8, {"value": 3}),
        RawMatch(K.Duration, "duration", 3, 14, {"period": {"hours": 3}}),
    ], drop_nested_numbers=False)
    ents = parser.extract(text)
    assert [(e.entity_kind, e.range) for e in ents] == [
        (K.Duration, Range(3, 14)),
        (K.Number, Range(3, 8)),
    ]

def test_results_sorted_by_start_then_kind_order():
    text = "20 and 20%"
    parser, _ = _parser([
        RawMatch(K.Percentage, "percentage", 7, 10, {"value": 20}),
        _num(0, 2, 20),
        RawMatch(K.Ordinal, "ordinal", 0, 2, {"value": 20}),
    ], drop_nested_numbers=False)
    ents = parser.extract(text)
    assert [e.entity_kind for e in ents] == [K.Number, K.Ordinal, K.Percentage]


# ======================
# Partial failure
# ======================
def test_negative_duration_is_dropped_and_the_rest_kept():
    text = "-3 hours or 2 hours"
    parser, _ = _parser([
        RawMatch(K.Duration, "duration", 0, 8, {"period": {"hours": -3}}),
        RawMatch(K.Duration, "duration", 12, 19, {"period": {"hours": 2}}),
    ])
    res = parser.extract_with_diagnostics(text)
    assert [e.value for e in res.entities] == ["2 hours"]
    assert res.entities[0].entity == DurationValue(hours=2)
    assert len(res.errors) == 1 and isinstance(res.errors[0], ConversionError)

def test_dropped_match_is_logged_with_its_rule(caplog):
    parser, _ = _parser([
        RawMatch(K.Duration, "duration", 0, 8, {"period": {"hours": -3}}, "duration-rule"),
    ])
    with caplog.at_level(logging.WARNING, logger="builtin_entity_parser"):
        assert parser.extract("-3 hours") == []
    assert "duration-rule" in caplog.text
    assert "negative duration component" in caplog.text

def test_bad_span_and_bad_kind_do_not_abort_the_call():
    parser, _ = _parser([
        _num(0, 50, 1),
        RawMatch(K.Time, "percentage", 0, 2, {"value": 20}),
        _num(0, 2, 20),
    ])
    res = parser.extract_with_diagnostics("20 ok")
    assert [e.entity for e in res.entities] == [NumberValue(20.0)]
    assert len(res.errors) == 2

def test_unrequested_kinds_are_discarded_before_conversion():
    parser, _ = _parser([
        RawMatch(K.Duration, "duration", 0, 8, {"period": {"hours": -3}}),
        RawMatch(K.Percentage, "percentage", 9, 12, {"value": 20}),
    ])
    res = parser.extract_with_diagnostics("-3 hours 20%", [K.Percentage])
    assert [e.entity for e in res.entities] == [PercentageValue(20.0)]
    assert res.errors == ()


# ======================
# Requested kinds
# ======================
def test_percentage_in_korean_is_empty_without_calling_the_engine():
    parser, engine = _parser([RawMatch(K.Percentage, "percentage", 0, 3, {"value": 20})], language=Language.KO)
    assert parser.extract("20%", [K.Percentage]) == []
    assert engine.calls == 0

def test_unsupported_kinds_are_skipped_silently():
    parser, engine = _parser([_num(0, 2, 20)], language="ko")
    ents = parser.extract("20", [K.Percentage, "snips/number"])
    assert [e.entity_kind for e in ents] == [K.Number]
    assert engine.calls == 1

def test_unknown_identifier_in_requested_kinds_propagates():
    parser, _ = _parser([])
    with pytest.raises(UnknownIdentifier):
        parser.extract("x", ["snips/colour"])

def test_supported_entity_kinds_on_parser():
    parser, _ = _parser([], language="ko")
    assert K.Percentage not in parser.supported_entity_kinds
    assert len(parser.supported_entity_kinds) == 6


# ======================
# Nested numbers
# ======================
def test_numbers_inside_longer_entities_are_dropped_by_default():
    text = "25% of 4"
    parser, _ = _parser([
        RawMatch(K.Percentage, "percentage", 0, 3, {"value": 25}),
        _num(0, 2, 25),
        _num(7, 8, 4),
    ])
    assert [e.value for e in parser.extract(text)] == ["25%", "4"]

def test_drop_nested_numbers_keeps_same_kind_overlaps():
    text = "two hundred"
    parser, _ = _parser([_num(0, 11, 200), _num(0, 3, 2)])
    ents = parser.extract(text)
    assert drop_nested_numbers(ents) == ents
    assert len(ents) == 2


# ======================
# Whole-call failures
# ======================
@pytest.mark.parametrize("code", ["xx", "english", "", None])
def test_unsupported_language(code):
    with pytest.raises(UnsupportedLanguageError):
        BuiltinEntityParser(code)

def test_engine_exception_is_wrapped():
    parser = BuiltinEntityParser(Language.EN, engine=BrokenEngine())
    with pytest.raises(EngineError) as exc:
        parser.extract("anything")
    assert exc.value.language is Language.EN
    assert isinstance(exc.value.__cause__, RuntimeError)

def test_factory_failure_is_wrapped_and_not_cached():
    attempts = []
    def factory(language, config):
        attempts.append(language)
        if len(attempts) == 1:
            raise OSError("tables missing")
        return FakeEngine([])
    cache = EngineCache(factory=factory)
    with pytest.raises(EngineError):
        cache.get("fr")
    assert Language.FR not in cache
    assert cache.get("fr") is cache.get(Language.FR)
    assert attempts == [Language.FR, Language.FR]


# ======================
# Engine cache
# ======================
def test_engine_built_once_under_concurrent_first_use():
    built = []
    def factory(language, config):
        time.sleep(0.05)
        built.append(language)
        return FakeEngine([])
    cache = EngineCache(factory=factory)
    engines = []
    barrier = threading.Barrier(8)
    def worker():
        barrier.wait()
        engines.append(cache.get(Language.DE))
    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert built == [Language.DE]
    assert len(engines) == 8 and all(e is engines[0] for e in engines)

def test_parsers_share_the_cached_engine():
    cfg = ParserConfig(timezone="Europe/Berlin", reference_time=datetime(2024, 7, 24, 10, 0))
    a = BuiltinEntityParser.get("de", cfg)
    b = BuiltinEntityParser.get(Language.DE, cfg)
    assert a.engine is b.engine
    assert Language.DE in builtin_entity_parser.default_cache(cfg)

def test_empty_result_type():
    res = ExtractionResult()
    assert res.entities == () and res.errors == ()


# ======================
# End to end with the default engine
# ======================
def test_in_one_hour_contains_the_duration():
    ents = extract("I'll be there in 1 hour", Language.EN, None, FIXED)
    durations = [e for e in ents if e.entity_kind is K.Duration]
    assert len(durations) == 1
    d = durations[0]
    assert d.value == "1 hour"
    assert d.range == Range(17, 23)
    assert d.entity == DurationValue(hours=1)
    assert d.entity.to_dict()["hours"] == 1
    assert all(v == 0 for k, v in d.entity.to_dict().items() if k not in ("kind", "hours", "precision"))

def test_in_one_hour_resolves_time_and_drops_the_bare_number():
    ents = extract("I'll be there in 1 hour", "en", config=FIXED)
    assert [(e.entity_kind, e.value) for e in ents] == [
        (K.Time, "in 1 hour"),
        (K.Duration, "1 hour"),
    ]
    assert ents[0].entity.value == "2024-07-24 11:00:00 +00:00"

def test_requested_kinds_restrict_default_engine_output():
    ents = extract("I'll be there in 1 hour", "en", ["snips/number"], FIXED)
    assert [(e.entity_kind, e.value) for e in ents] == [(K.Number, "1")]

def test_korean_percentage_request_is_empty():
    assert extract("20퍼센트", Language.KO, [K.Percentage], FIXED) == []

def test_duration_beyond_datetime_range_survives():
    res = BuiltinEntityParser.get("en", FIXED).extract_with_diagnostics("I'll be back in 10000 years")
    assert [(e.entity_kind, e.value) for e in res.entities] == [(K.Duration, "10000 years")]
    assert res.entities[0].entity == DurationValue(years=10000)
