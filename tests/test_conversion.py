# tests/test_conversion.py
from datetime import datetime, timedelta, timezone

import pytest

from builtin_entity import BuiltinEntityKind, Range
from conversion import (
    RawMatch,
    convert_match,
    convert_slot_value,
    format_moment,
    normalize_unit,
    parse_precision,
)
from errors import ConversionError
from ontology import (
    AmountOfMoneyValue,
    DurationValue,
    Grain,
    InstantTimeValue,
    NumberValue,
    OrdinalValue,
    PercentageValue,
    Precision,
    TemperatureValue,
    TimeIntervalValue,
)

K = BuiltinEntityKind
PARIS_SUMMER = timezone(timedelta(hours=2))


# -------------------------
# Small helpers
# -------------------------
def _raw(kind, output, fields, start=0, end=0):
    return RawMatch(kind, output, start, end, fields)

def _value(kind, output, **fields):
    return convert_slot_value(_raw(kind, output, fields))


# ======================
# Precision / units
# ======================
@pytest.mark.parametrize("raw, expected", [
    (None, Precision.Exact),
    ("exact", Precision.Exact),
    ("approximate", Precision.Approximate),
    ("Approximate", Precision.Approximate),
    (Precision.Approximate, Precision.Approximate),
])
def test_parse_precision(raw, expected):
    assert parse_precision(raw) is expected

def test_parse_precision_rejects_unknown_flag():
    with pytest.raises(ConversionError):
        parse_precision("roughly")

@pytest.mark.parametrize("raw, expected", [(None, None), ("", None), ("   ", None), (" € ", "€"), ("celsius", "celsius")])
def test_normalize_unit(raw, expected):
    assert normalize_unit(raw) == expected


# ======================
# Scalar kinds
# ======================
def test_numbers_and_percentages():
    assert _value(K.Number, "integer", value=42) == NumberValue(42.0)
    assert _value(K.Number, "float", value=2.5) == NumberValue(2.5)
    assert _value(K.Percentage, "percentage", value=25) == PercentageValue(25.0)

def test_ordinal_accepts_integral_floats_only():
    assert _value(K.Ordinal, "ordinal", value=3.0) == OrdinalValue(3)
    with pytest.raises(ConversionError):
        _value(K.Ordinal, "ordinal", value=3.5)

def test_money_default_precision_and_blank_unit():
    assert _value(K.AmountOfMoney, "amount_of_money", value=10, unit="") == AmountOfMoneyValue(10.0, Precision.Exact, None)
    assert _value(K.AmountOfMoney, "amount_of_money", value=5, unit="€", precision="approximate") == \
        AmountOfMoneyValue(5.0, Precision.Approximate, "€")

def test_temperature_without_unit():
    assert _value(K.Temperature, "temperature", value=-3) == TemperatureValue(-3.0, None)

@pytest.mark.parametrize("bad", [None, "12", float("nan"), float("inf"), True])
def test_non_finite_or_missing_values_are_rejected(bad):
    with pytest.raises(ConversionError):
        _value(K.Number, "integer", value=bad)


# ======================
# Durations
# ======================
def test_duration_missing_components_default_to_zero():
    v = _value(K.Duration, "duration", period={"months": 3})
    assert v == DurationValue(months=3)
    assert (v.years, v.quarters, v.weeks, v.days, v.hours, v.minutes, v.seconds) == (0,) * 7
    assert v.precision is Precision.Exact

def test_duration_reads_flat_fields_too():
    assert _value(K.Duration, "duration", hours=1, minutes=30) == DurationValue(hours=1, minutes=30)

def test_duration_has_no_upper_bound():
    assert _value(K.Duration, "duration", period={"years": 10**12}) == DurationValue(years=10**12)
    assert _value(K.Duration, "duration", days=99999999999).days == 99999999999

def test_duration_approximate():
    v = _value(K.Duration, "duration", period={"days": 2}, precision="approximate")
    assert v.precision is Precision.Approximate

@pytest.mark.parametrize("period", [{"hours": -1}, {"days": 1.5}, {"weeks": "2"}, {"minutes": True}])
def test_bad_duration_components_are_rejected(period):
    with pytest.raises(ConversionError):
        _value(K.Duration, "duration", period=period)


# ======================
# Time
# ======================
def test_format_moment_from_aware_datetime():
    dt = datetime(2017, 6, 13, 18, 0, tzinfo=PARIS_SUMMER)
    assert format_moment(dt) == "2017-06-13 18:00:00 +02:00"

@pytest.mark.parametrize("raw, expected", [
    ("2017-06-13 18:00:00 +02:00", "2017-06-13 18:00:00 +02:00"),
    ("2017-06-13T18:00:00+0200", "2017-06-13 18:00:00 +02:00"),
    ("2017-06-13T18:00Z", "2017-06-13 18:00:00 +00:00"),
    ("2017-06-13 18:00:00.500 -05:30", "2017-06-13 18:00:00 -05:30"),
])
def test_format_moment_from_strings(raw, expected):
    assert format_moment(raw) == expected

@pytest.mark.parametrize("raw", [datetime(2017, 6, 13, 18), "2017-06-13 18:00:00", "tomorrow", 1497369600])
def test_format_moment_requires_an_offset(raw):
    with pytest.raises(ConversionError):
        format_moment(raw)

def test_instant_time():
    v = _value(K.Time, "datetime", moment=datetime(2017, 6, 13, 18, tzinfo=PARIS_SUMMER), grain="hour")
    assert v == InstantTimeValue("2017-06-13 18:00:00 +02:00", Grain.Hour, Precision.Exact)

def test_instant_time_needs_grain_and_moment():
    with pytest.raises(ConversionError):
        _value(K.Time, "datetime", moment="2017-06-13 18:00:00 +02:00", grain="decade")
    with pytest.raises(ConversionError):
        _value(K.Time, "datetime", grain="Hour")

def test_interval_with_one_bound():
    v = _value(K.Time, "datetime_interval", **{"from": None, "to": "2017-06-08 00:00:00 +02:00"})
    assert v == TimeIntervalValue(from_=None, to="2017-06-08 00:00:00 +02:00")

def test_interval_without_bounds_is_rejected():
    with pytest.raises(ConversionError):
        _value(K.Time, "datetime_interval", **{"from": None, "to": None})


# ======================
# Whole matches
# ======================
def test_kind_mismatch_is_rejected():
    with pytest.raises(ConversionError) as exc:
        _value(K.Time, "percentage", value=20)
    assert exc.value.match is not None

def test_declared_kind_may_be_an_identifier():
    assert _value("snips/percentage", "percentage", value=20) == PercentageValue(20.0)
    with pytest.raises(ConversionError):
        _value("snips/bogus", "percentage", value=20)

def test_unknown_output_tag_is_rejected():
    with pytest.raises(ConversionError):
        _value(K.Number, "roman_numeral", value=4)

def test_convert_match_builds_entity_from_span():
    text = "I'll be there in 1 hour"
    ent = convert_match(text, RawMatch(K.Duration, "duration", 17, 23, {"period": {"hours": 1}}))
    assert ent.value == "1 hour"
    assert ent.range == Range(17, 23)
    assert ent.entity_kind is K.Duration
    assert ent.entity == DurationValue(hours=1)

@pytest.mark.parametrize("start, end", [(-1, 2), (3, 2), (0, 99), (0.0, 2), (True, 2)])
def test_convert_match_rejects_bad_spans(start, end):
    with pytest.raises(ConversionError):
        convert_match("twenty", RawMatch(K.Number, "integer", start, end, {"value": 20}))

@pytest.mark.parametrize("fields", [None, [], "value=3", {"value": object()}])
def test_malformed_fields_only_raise_conversion_error(fields):
    with pytest.raises(ConversionError):
        convert_match("three", RawMatch(K.Number, "integer", 0, 5, fields))
