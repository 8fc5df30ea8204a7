# -*- coding: utf-8 -*-
# builtin_entity_parser.py

"""
BUILTIN ENTITY PARSER
=====================

Public entry point:

    extract(text, language, requested_kinds=None, config=None) -> List[BuiltinEntity]

or, holding on to a parser:

    parser = BuiltinEntityParser.get("en")
    parser.extract("I'll be there in 1 hour")
    parser.extract_with_diagnostics(text)   # -> ExtractionResult(entities, errors)

Behavior
--------
  • requested_kinds None -> every kind the language supports; kinds the
    language does not support are skipped silently (no engine call when none
    remain); identifiers ("snips/number") are accepted as well as enum members
  • one engine invocation per call; each raw match is converted on its own and
    a bad match is dropped (logged at WARNING, kept in ExtractionResult.errors)
  • Number/Ordinal matches strictly inside a longer entity of another kind are
    dropped unless `ParserConfig.drop_nested_numbers` is off
  • results sorted by start ascending, end descending, then kind order
  • whole-call failures: UnsupportedLanguageError, EngineError

Engines
-------
An engine is any object with `parse(text) -> Iterable[RawMatch]`, built per
language by `factory(language, config)`. `EngineCache` builds each language's
engine lazily, exactly once, behind a per-language lock.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import threading
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

import logging
logger = logging.getLogger(__name__)

from builtin_entity import BuiltinEntity, BuiltinEntityKind, supported_entity_kinds
from conversion import convert_match, declared_kind
from errors import ConversionError, EngineError
from extractor import DEFAULT_CONFIG, ParserConfig, build_engine
from language import Language

EngineFactory = Callable[[Language, ParserConfig], Any]
KindLike = Union[BuiltinEntityKind, str]

_NESTABLE = (BuiltinEntityKind.Number, BuiltinEntityKind.Ordinal)
_KIND_ORDER = {k: i for i, k in enumerate(BuiltinEntityKind.all())}


@dataclass(frozen=True)
class ExtractionResult:
    entities: Tuple[BuiltinEntity, ...] = ()
    errors: Tuple[ConversionError, ...] = field(default=(), compare=False)

# =========================
# Engine cache
# =========================
class EngineCache:
    """One engine per language, built on first use."""

    def __init__(self, factory: Optional[EngineFactory] = None, config: Optional[ParserConfig] = None):
        self.factory = factory or build_engine
        self.config = config or DEFAULT_CONFIG
        self._engines: Dict[Language, Any] = {}
        self._locks: Dict[Language, threading.Lock] = {lang: threading.Lock() for lang in Language.all()}

    def get(self, language: Union[Language, str]) -> Any:
        lang = Language.from_code(language)
        engine = self._engines.get(lang)
        if engine is not None:
            return engine
        with self._locks[lang]:
            engine = self._engines.get(lang)
            if engine is None:
                logger.info("engine: building %s engine", lang)
                try:
                    engine = self.factory(lang, self.config)
                except Exception as exc:
                    raise EngineError(lang, f"engine construction failed: {exc}") from exc
                self._engines[lang] = engine
        return engine

    def warm(self, languages: Iterable[Union[Language, str]]) -> None:
        for lang in languages:
            self.get(lang)

    def __contains__(self, language: Union[Language, str]) -> bool:
        return Language.from_code(language) in self._engines


_CACHES: Dict[ParserConfig, EngineCache] = {}
_CACHES_LOCK = threading.Lock()

def default_cache(config: Optional[ParserConfig] = None) -> EngineCache:
    """Process-wide cache for `config` (one per distinct config)."""
    config = config or DEFAULT_CONFIG
    with _CACHES_LOCK:
        cache = _CACHES.get(config)
        if cache is None:
            cache = _CACHES[config] = EngineCache(config=config)
    if config.eager_languages:
        cache.warm(config.eager_languages)
    return cache

# =========================
# Parser
# =========================
def _coerce_kind(kind: KindLike) -> BuiltinEntityKind:
    if isinstance(kind, BuiltinEntityKind):
        return kind
    return BuiltinEntityKind.from_identifier(kind)

def _entity_order(e: BuiltinEntity):
    return (e.range.start, -e.range.end, _KIND_ORDER[e.entity_kind])

def drop_nested_numbers(entities: List[BuiltinEntity]) -> List[BuiltinEntity]:
    """Drop Number/Ordinal entities strictly inside a longer entity of another kind."""
    def nested(e: BuiltinEntity) -> bool:
        return any(
            o.entity_kind is not e.entity_kind
            and o.range.start <= e.range.start and e.range.end <= o.range.end
            and o.range.length > e.range.length
            for o in entities
        )
    return [e for e in entities if e.entity_kind not in _NESTABLE or not nested(e)]


class BuiltinEntityParser:
    """Extracts builtin entities from texts of one language."""

    def __init__(self, language: Union[Language, str], engine: Any = None,
                 config: Optional[ParserConfig] = None, cache: Optional[EngineCache] = None):
        self.language = Language.from_code(language)
        self.config = config or DEFAULT_CONFIG
        self._engine = engine
        self._cache = cache

    @classmethod
    def get(cls, language: Union[Language, str], config: Optional[ParserConfig] = None) -> "BuiltinEntityParser":
        """Parser backed by the shared engine cache."""
        config = config or DEFAULT_CONFIG
        return cls(language, config=config, cache=default_cache(config))

    @property
    def supported_entity_kinds(self) -> Tuple[BuiltinEntityKind, ...]:
        return supported_entity_kinds(self.language)

    @property
    def engine(self) -> Any:
        if self._engine is None:
            cache = self._cache or default_cache(self.config)
            self._engine = cache.get(self.language)
        return self._engine

    def effective_kinds(self, requested_kinds: Optional[Iterable[KindLike]] = None) -> FrozenSet[BuiltinEntityKind]:
        if requested_kinds is None:
            return frozenset(self.supported_entity_kinds)
        kinds = {_coerce_kind(k) for k in requested_kinds}
        skipped = [k for k in kinds if not k.supports(self.language)]
        if skipped:
            logger.debug("parser[%s]: skipping unsupported kinds %r", self.language, skipped)
        return frozenset(k for k in kinds if k.supports(self.language))

    def extract(self, text: str, requested_kinds: Optional[Iterable[KindLike]] = None) -> List[BuiltinEntity]:
        return list(self.extract_with_diagnostics(text, requested_kinds).entities)

    def extract_with_diagnostics(self, text: str,
                                 requested_kinds: Optional[Iterable[KindLike]] = None) -> ExtractionResult:
        if not isinstance(text, str):
            raise TypeError(f"text must be a string, got {type(text).__name__}")
        kinds = self.effective_kinds(requested_kinds)
        if not kinds:
            return ExtractionResult()

        engine = self.engine
        try:
            raw = list(engine.parse(text))
        except EngineError:
            raise
        except Exception as exc:
            raise EngineError(self.language, f"engine failed: {exc}") from exc

        entities: List[BuiltinEntity] = []
        errors: List[ConversionError] = []
        for match in raw:
            try:
                if declared_kind(match) not in kinds:
                    continue
                entity = convert_match(text, match)
            except ConversionError as exc:
                logger.warning("parser[%s]: dropping %s match %r at %r-%r: %s",
                               self.language, match.source, match.output, match.start, match.end, exc.reason)
                errors.append(exc)
                continue
            entities.append(entity)

        if self.config.drop_nested_numbers:
            entities = drop_nested_numbers(entities)
        entities.sort(key=_entity_order)
        logger.debug("parser[%s]: %d entities, %d dropped for %r", self.language, len(entities), len(errors), text)
        return ExtractionResult(tuple(entities), tuple(errors))


def extract(text: str, language: Union[Language, str],
            requested_kinds: Optional[Iterable[KindLike]] = None,
            config: Optional[ParserConfig] = None) -> List[BuiltinEntity]:
    """Extract builtin entities from `text` with the shared parser for `language`."""
    return BuiltinEntityParser.get(language, config).extract(text, requested_kinds)
