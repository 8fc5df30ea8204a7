# tests/test_shared_config.py
import argparse
import types
from datetime import datetime

import pytest

from builtin_entity import BuiltinEntityKind
from extractor import DEFAULT_CONFIG
from language import Language
from shared_config import ParserSettings, add_parser_flags, parser_config_from_args


def _mk_args(**overrides):
    """Mimic argparse.Namespace the way shared_config expects."""
    ns = types.SimpleNamespace(
        language="en",
        entity_kinds=None,
        timezone=None,
        reference_time=None,
        prefer_dates_from=None,
        keep_nested_numbers=False,
        no_number_parser=False,
        eager_languages=None,
    )
    for k, v in overrides.items():
        setattr(ns, k, v)
    return ns


def test_defaults_match_default_config():
    out = parser_config_from_args(_mk_args())
    assert out.config == DEFAULT_CONFIG
    assert out.language is Language.EN
    assert out.requested_kinds is None
    assert out.timezone == "UTC"

def test_flags_flow_into_parser_config():
    out = parser_config_from_args(_mk_args(
        language="FR",
        timezone="Europe/Paris",
        reference_time="2024-07-24T10:00:00",
        prefer_dates_from="current_period",
        keep_nested_numbers=True,
        no_number_parser=True,
        eager_languages=["de", "en"],
        entity_kinds=["snips/duration", "snips/number"],
    ))
    cfg = out.config
    assert out.language is Language.FR
    assert cfg.timezone == "Europe/Paris"
    assert cfg.reference_time == datetime(2024, 7, 24, 10, 0)
    assert cfg.prefer_dates_from == "current_period"
    assert cfg.drop_nested_numbers is False
    assert cfg.use_number_parser is False
    assert cfg.eager_languages == (Language.DE, Language.EN)
    assert out.requested_kinds == [BuiltinEntityKind.Duration, BuiltinEntityKind.Number]

def test_bad_reference_time_is_an_argument_error():
    with pytest.raises(argparse.ArgumentTypeError):
        parser_config_from_args(_mk_args(reference_time="tomorrow-ish"))

def test_flags_parse_from_command_line():
    parser = argparse.ArgumentParser()
    add_parser_flags(parser)
    args = parser.parse_args(["--language", "de", "--entity-kinds", "snips/percentage", "--keep-nested-numbers"])
    out = parser_config_from_args(args)
    assert out.language is Language.DE
    assert out.requested_kinds == [BuiltinEntityKind.Percentage]
    assert out.config.drop_nested_numbers is False

def test_unknown_language_flag_is_rejected_by_argparse():
    parser = argparse.ArgumentParser()
    add_parser_flags(parser)
    with pytest.raises(SystemExit):
        parser.parse_args(["--language", "xx"])

def test_parser_settings_to_dict_and_config():
    s = ParserSettings(language="es", timezone="Europe/Madrid", keep_nested_numbers=True)
    assert s.to_dict() == {"language": "es", "timezone": "Europe/Madrid", "keep_nested_numbers": True}
    cfg = s.to_config()
    assert cfg.timezone == "Europe/Madrid"
    assert cfg.drop_nested_numbers is False
    assert cfg.reference_time is None
