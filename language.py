# language.py
"""Closed set of natural languages the ontology knows about."""

from __future__ import annotations
from enum import Enum
from typing import Tuple, Union

from errors import UnsupportedLanguageError


class Language(Enum):
    DE = "de"
    EN = "en"
    ES = "es"
    FR = "fr"
    JA = "ja"
    KO = "ko"

    @property
    def code(self) -> str:
        return self.value

    @property
    def full_name(self) -> str:
        return _FULL_NAMES[self]

    @classmethod
    def all(cls) -> Tuple["Language", ...]:
        return _ALL

    @classmethod
    def from_code(cls, code: Union[str, "Language"]) -> "Language":
        """Accepts a Language or a code such as "en" / "EN"."""
        if isinstance(code, Language):
            return code
        if not isinstance(code, str):
            raise UnsupportedLanguageError(code)
        norm = code.strip().lower()
        for lang in _ALL:
            if lang.value == norm:
                return lang
        raise UnsupportedLanguageError(code)

    def __str__(self) -> str:
        return self.value


_ALL: Tuple[Language, ...] = (
    Language.DE,
    Language.EN,
    Language.ES,
    Language.FR,
    Language.JA,
    Language.KO,
)

_FULL_NAMES = {
    Language.DE: "German",
    Language.EN: "English",
    Language.ES: "Spanish",
    Language.FR: "French",
    Language.JA: "Japanese",
    Language.KO: "Korean",
}
