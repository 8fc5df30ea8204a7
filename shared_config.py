# shared_config.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional
import argparse
from types import SimpleNamespace

from builtin_entity import BuiltinEntityKind
from extractor import ParserConfig
from language import Language

# ---- Public API -----------------------------------------------------------------

def add_parser_flags(parser: argparse.ArgumentParser) -> None:
    """
    Attach a consistent set of flags to any argparse parser.
    Use this in CLIs that ultimately call builtin_entity_parser.extract.
    """
    parser.add_argument("--language", type=str, default="en",
                        choices=[lang.code for lang in Language.all()],
                        help="Language of the texts to parse.")
    parser.add_argument("--entity-kinds", nargs="*", default=None,
                        choices=[k.identifier for k in BuiltinEntityKind.all()],
                        help="Restrict extraction to these kinds (identifiers). Default: all supported.")

    # Time resolution
    parser.add_argument("--timezone", type=str, default=None,
                        help="Timezone used for time resolution (e.g., 'Europe/Paris'). Default: UTC.")
    parser.add_argument("--reference-time", type=str, default=None,
                        help="ISO timestamp that relative expressions resolve against. Default: now.")
    parser.add_argument("--prefer-dates-from", type=str, default=None,
                        choices=["future", "current_period"],
                        help="How to resolve dates without a year or day ('4pm', 'July 3').")

    # Behavior
    parser.add_argument("--keep-nested-numbers", action="store_true",
                        help="Keep numbers/ordinals found inside longer entities.")
    parser.add_argument("--no-number-parser", action="store_true",
                        help="Use the built-in word tables instead of number_parser.")
    parser.add_argument("--eager-languages", nargs="*", default=None,
                        choices=[lang.code for lang in Language.all()],
                        help="Build these language engines up front.")

def parser_config_from_args(args: argparse.Namespace) -> SimpleNamespace:
    """
    Convert parsed args → SimpleNamespace consumed by CLIs.
    Provides a ready-to-use ParserConfig at `.config` and mirrors the other selections.
    """
    reference_time = None
    raw_ref = getattr(args, "reference_time", None)
    if raw_ref:
        try:
            reference_time = datetime.fromisoformat(raw_ref)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"invalid --reference-time {raw_ref!r}: {exc}") from exc

    eager = tuple(Language.from_code(c) for c in (getattr(args, "eager_languages", None) or ()))

    config = ParserConfig(
        timezone=getattr(args, "timezone", None) or "UTC",
        reference_time=reference_time,
        prefer_dates_from=getattr(args, "prefer_dates_from", None) or "future",
        use_number_parser=not getattr(args, "no_number_parser", False),
        drop_nested_numbers=not getattr(args, "keep_nested_numbers", False),
        eager_languages=eager,
    )

    kinds_raw = getattr(args, "entity_kinds", None)
    kinds = [BuiltinEntityKind.from_identifier(k) for k in kinds_raw] if kinds_raw else None

    return SimpleNamespace(
        config=config,
        language=Language.from_code(getattr(args, "language", None) or "en"),
        # None means "every kind the language supports"
        requested_kinds=kinds,
        timezone=config.timezone,
    )

# ---- Optional: typed container if you want a dataclass in code -------------------

@dataclass
class ParserSettings:
    language: str = "en"
    timezone: Optional[str] = None
    reference_time: Optional[str] = None
    prefer_dates_from: Optional[str] = None
    keep_nested_numbers: bool = False
    entity_kinds: Optional[List[str]] = None

    def to_dict(self) -> Dict:
        """
        Emit a compact dict of the non-default settings (for logs and reports).
        """
        d = {"language": self.language}
        if self.timezone: d["timezone"] = self.timezone
        if self.reference_time: d["reference_time"] = self.reference_time
        if self.prefer_dates_from: d["prefer_dates_from"] = self.prefer_dates_from
        if self.keep_nested_numbers: d["keep_nested_numbers"] = True
        if self.entity_kinds: d["entity_kinds"] = list(self.entity_kinds)
        return d

    def to_config(self) -> ParserConfig:
        ns = argparse.Namespace(**self.__dict__)
        return parser_config_from_args(ns).config
