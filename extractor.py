# -*- coding: utf-8 -*-
# extractor.py

"""
RULE-BASED BUILTIN ENTITY ENGINE
================================

What it does
------------
The default parsing engine behind `builtin_entity_parser`. Given a text in one
language it emits loosely-typed `RawMatch` candidates with spans:

  • Number        : digits ("2,500", "2.000,5") and number words ("twenty one",
                    "einundzwanzig", "四千三百二", "천 아흔 아홉")
  • Ordinal       : "1st", "3.", "1er", "the twenty third", "zweiundzwanzigster", "첫번째"
  • Percentage    : "25%", "twenty percent", "20 por ciento"
  • AmountOfMoney : "$10", "10$", "around 5€", "ten dollars and five cents", "약 5 유로"
  • Temperature   : "70K", "3°C", "twenty three degrees", "섭씨 20도"
  • Duration      : "1h", "8 years and two days", "half an hour", "2stdn", "1시간"
  • Time          : "today", "4:30 pm", "in 1 hour", "July 24, 2024", "tomorrow at 4pm",
                    "3rd tuesday of June", "from 3pm to 5pm", "after 6pm", "tonight"

How it extracts
---------------
Per language, the word tables of `lexicon.py` are compiled once into a
`_Grammar` of regexes. Values are normalized with:
  • number words : `number_parser` (EN/ES) with a table-driven fallback
  • money amounts: `price_parser` (decimal separator per language)
  • dates        : `dateparser` for month-name dates, direct arithmetic for
                   relative expressions, clock times and ISO dates

Every candidate is emitted, overlaps included; the parser facade decides what
to keep and in which order.

Configuration
-------------
`ParserConfig(timezone="UTC", reference_time=None, prefer_dates_from="future",
use_number_parser=True, drop_nested_numbers=True, eager_languages=())`
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
import calendar
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
from zoneinfo import ZoneInfo
import regex as re

import logging
logger = logging.getLogger(__name__)

import dateparser
from number_parser import parse_number
from price_parser import Price

from builtin_entity import BuiltinEntityKind
from conversion import RawMatch
from language import Language
from lexicon import Lexicon, lexicon_for
from ontology import Grain, Precision

# =========================
# Config
# =========================
@dataclass(frozen=True)
class ParserConfig:
    timezone: str = "UTC"
    reference_time: Optional[datetime] = None   # None -> "now" at each parse
    prefer_dates_from: str = "future"           # or "current_period"; "4pm" after 4pm means tomorrow
    use_number_parser: bool = True
    drop_nested_numbers: bool = True            # drop Number/Ordinal inside longer entities
    eager_languages: Tuple[Language, ...] = ()

DEFAULT_CONFIG = ParserConfig()

# number_parser only knows a few of our languages
_NUMBER_PARSER_LANGS = {Language.EN: "en", Language.ES: "es"}

_KIND = BuiltinEntityKind

# =========================
# Regex helpers
# =========================
def _alt(words: Iterable[str]) -> str:
    """Longest-first alternation; spaces inside entries match any whitespace."""
    ws = sorted({w for w in words if w}, key=len, reverse=True)
    if not ws:
        return r"(?!)"
    return "(?:" + "|".join(r"\s+".join(re.escape(p) for p in w.split()) for w in ws) + ")"

def _key(s: str) -> str:
    return re.sub(r"\s+", " ", s.strip().lower())

def _strip_ordinals(s: str) -> str:
    # "24th of July 2024" -> "24 July 2024"
    s = re.sub(r"\b(\d+)(?:st|nd|rd|th|er|º|\.)(?=\s)", r"\1", s, flags=re.IGNORECASE)
    return re.sub(r"\b(\d{1,2})\s+(?:of|de|du)\s+", r"\1 ", s, flags=re.IGNORECASE)


class _Grammar:
    """All regexes of one language, compiled once."""

    def __init__(self, lex: Lexicon):
        self.lex = lex
        I = re.IGNORECASE
        wb = lex.word_boundary

        def b(pat: str) -> str:
            return rf"(?<!\w)(?:{pat})(?!\w)" if wb else pat

        # --- numbers ---
        if lex.decimal_comma:
            core = r"\d{1,3}(?:\.\d{3})+(?:,\d+)?|\d+(?:,\d+)?"
        else:
            core = r"\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?"
        sign_lb = r"(?<![\w.,-])" if wb else r"(?<![\d.,-])"
        num_lb = r"(?<![\w.,])" if wb else r"(?<![\d.,])"
        self.digits = rf"(?:{sign_lb}-)?{num_lb}(?:{core})(?!\d)"

        toks = _alt(lex.all_number_tokens)
        joins = _alt(lex.joiners)
        if lex.number_word_rx:
            words = lex.number_word_rx
        else:
            if lex.compound:
                word = rf"(?<!\w)(?:{toks}|{joins})+(?!\w)"
            else:
                word = rf"(?<!\w){toks}(?!\w)"
            words = rf"{word}(?:[\s-]+(?:{joins}[\s-]+)?{word})*"
        self.words = words
        num = rf"(?:{self.digits}|{words})"
        self.num = num
        self.vocab = sorted(set(lex.all_number_tokens) | set(lex.joiners), key=len, reverse=True)

        self.digits_rx = re.compile(self.digits)
        self.words_rx = re.compile(words, I)

        # --- ordinals ---
        ordw = _alt(lex.ordinal_words)
        arts = _alt(lex.ordinal_articles)
        lead = rf"(?:(?:{arts})\s+)?"
        spaced = rf"(?:(?P<pre>{words})[\s-]+(?:{joins}[\s-]+)?)?(?P<ord>{ordw})"
        if lex.compound and wb:
            glued = rf"(?P<pre>(?:{toks}|{joins})+)(?P<ord>{ordw})"
            self.ordinal_words_rx = re.compile(b(rf"{lead}(?:{spaced}|{glued})"), I)
        else:
            self.ordinal_words_rx = re.compile(b(lead + spaced), I)
        self.ordinal_digits_rx = re.compile(
            rf"{num_lb}(?:(?:{lex.ordinal_prefix_rx})(?P<n>\d+)|(?P<n>\d+)(?:{lex.ordinal_suffix_rx}))", I
        )

        # --- percentages, money, temperatures ---
        approx = _alt(lex.approx_words)
        self.percent_rx = re.compile(b(rf"(?P<num>{num})\s*(?:{lex.percent_rx})"), I)
        cur = _alt(lex.currencies)
        cents = _alt(lex.cent_words)
        self.money_rx = re.compile(b(
            rf"(?:(?P<approx>{approx})\s*)?"
            rf"(?:(?P<sym>[$€£¥₩])\s*(?P<num>{self.digits})"
            rf"|(?P<num>{num})\s*(?P<cur>{cur})(?:\s*,?\s*(?:{joins}\s+)?(?P<cnum>{num})\s*(?P<cw>{cents}))?)"
        ), I)
        self.cents_rx = re.compile(b(rf"(?P<num>{num})\s*(?P<cw>{cents})"), I)
        self.temperature_units = {**{_key(k): v for k, v in lex.temperature_units.items()}, "k": "kelvin"}
        self.temperature_rx = re.compile(b(
            rf"(?P<num>{num})\s*(?P<unit>{_alt(lex.temperature_units)}|(?-i:K))"
        ), I)
        self.temperature_prefix_rx = None
        if lex.temperature_prefixes:
            self.temperature_prefix_rx = re.compile(
                rf"(?P<pre>{_alt(lex.temperature_prefixes)})\s*(?P<num>{num})\s*(?:도|度)?", I
            )

        # --- durations ---
        units = _alt(lex.duration_units)
        art = _alt(lex.unit_articles)
        unit_end = r"(?!\w)" if wb else ""
        piece = rf"(?:(?P<num>{num})\s*|(?P<art>{art})\s+)(?P<unit>{units}){unit_end}"
        piece_nc = rf"(?:{num}\s*|{art}\s+){units}{unit_end}"
        chain = rf"{piece_nc}(?:(?:\s*,\s*|\s+(?:{joins}\s+)?|\s*){piece_nc})*"
        self.duration_piece_rx = re.compile(piece, I)
        self.duration_rx = re.compile(b(
            rf"(?:(?P<approx>{approx})\s+)?(?:(?P<fixed>{_alt(lex.fixed_durations)})|(?P<chain>{chain}))"
        ), I)
        self.fixed_durations = {_key(k): v for k, v in lex.fixed_durations.items()}

        # --- time ---
        self.day_rx = re.compile(b(_alt(lex.day_words)), I)
        self.day_words = {_key(k): v for k, v in lex.day_words.items()}
        self.tonight_rx = re.compile(b(_alt(lex.tonight_words)), I)
        self.weekday_rx = re.compile(b(
            rf"(?:(?P<next>{_alt(lex.next_words)})\s+)?(?P<wd>{_alt(lex.weekdays)})"
        ), I)
        self.weekdays = {_key(k): v for k, v in lex.weekdays.items()}
        self.month_rx = None
        if lex.months:
            ordsuf = r"(?:st|nd|rd|th|er|º|\.)"
            self.month_rx = re.compile(b(
                rf"(?:(?P<d>\d{{1,2}}){ordsuf}?\s+(?:(?:of|de|du)\s+)?)?"
                rf"(?P<mon>{_alt(lex.months)})\.?"
                rf"(?:\s+(?P<d2>\d{{1,2}}){ordsuf}?(?!\d))?"
                rf"(?:,?\s+(?P<y>\d{{4}}))?"
            ), I)
        self.months = {_key(k): v for k, v in lex.months.items()}
        self.numeric_date_rx = re.compile(lex.numeric_date_rx) if lex.numeric_date_rx else None
        self.iso_rx = re.compile(
            r"(?<!\d)(?P<y>\d{4})-(?P<mo>\d{2})-(?P<d>\d{2})"
            r"(?:[T\s](?P<H>\d{2}):(?P<M>\d{2})(?::(?P<S>\d{2}))?)?(?!\d)"
        )
        self.clock_rx = re.compile(b(lex.clock_rx), I)
        self.at_gap_rx = re.compile(rf"\s*(?:,\s*)?(?:{_alt(lex.at_words)}\s*)?", I)

        prefix_lb = r"(?<!\w)" if wb else ""
        self.clock_prefix_rx = re.compile(rf"(?<![\w'’]){_alt(lex.clock_prefixes)}\s+$", I)

        # "3rd tuesday of June", "le premier jeudi de juin", "5 월 첫째 목요일"
        nth = rf"(?:(?P<ow>{ordw})|(?P<od>\d{{1,2}})(?:{lex.ordinal_suffix_rx}))"
        wds = _alt(lex.weekdays)
        self.nth_weekday_rx = None
        if lex.months and lex.weekdays:
            self.nth_weekday_rx = re.compile(b(
                rf"{lead}{nth}\s+(?P<wd>{wds})\s+(?:{_alt(lex.month_links)}\s+)?(?P<mon>{_alt(lex.months)})\.?"
                rf"(?:,?\s+(?P<y>\d{{4}}))?"
            ), I)
        elif lex.month_number_rx and lex.weekdays:
            self.nth_weekday_rx = re.compile(rf"{lex.month_number_rx}\s*{nth}\s*(?P<wd>{wds})", I)
        self.in_prefix_rx = re.compile(rf"{prefix_lb}{_alt(lex.in_prefixes)}\s+$", I)
        self.ago_prefix_rx = re.compile(rf"{prefix_lb}{_alt(lex.ago_prefixes)}\s+$", I)
        self.later_suffix_rx = re.compile(rf"\s*{_alt(lex.later_suffixes)}", I)
        self.ago_suffix_rx = re.compile(rf"\s*{_alt(lex.ago_suffixes)}", I)

        mid_words = _alt(lex.interval_to)
        self.interval_mid_rx = re.compile(
            rf"\s*{prefix_lb}(?P<w>{mid_words})" + (r"(?!\w)" if wb else "") + r"\s*", I
        )
        self.interval_from_rx = re.compile(rf"{prefix_lb}{_alt(lex.interval_from)}\s*$", I)
        self.interval_suffix_rx = re.compile(rf"\s*{_alt(lex.interval_suffixes)}", I)
        self.after_rx = re.compile(rf"{prefix_lb}{_alt(lex.after_words)}\s+$", I)
        self.before_rx = re.compile(rf"{prefix_lb}{_alt(lex.before_words)}\s+$", I)
        self.after_suffix_rx = re.compile(rf"\s*{_alt(lex.after_suffixes)}", I)
        self.before_suffix_rx = re.compile(rf"\s*{_alt(lex.before_suffixes)}", I)
        self.joiners = {_key(j) for j in lex.joiners}

# =========================
# Number normalization
# =========================
def _parse_digits(s: str, lex: Lexicon) -> float:
    s = s.strip()
    if lex.decimal_comma:
        s = s.replace(".", "").replace(",", ".")
    else:
        s = s.replace(",", "")
    return float(s)

def _segment(word: str, vocab: List[str]) -> Optional[List[str]]:
    """Split a glued number word ("einundzwanzig") into vocabulary tokens."""
    if not word:
        return []
    for tok in vocab:
        if word.startswith(tok):
            rest = _segment(word[len(tok):], vocab)
            if rest is not None:
                return [tok] + rest
    return None

def _number_tokens(s: str, g: _Grammar) -> Optional[List[str]]:
    lex = g.lex
    raw = [t for t in re.split(r"[\s-]+", s.strip().lower()) if t]
    if lex.compound:
        toks: List[str] = []
        for t in raw:
            seg = _segment(t, g.vocab)
            if seg is None:
                return None
            toks.extend(seg)
        return toks
    # multi-word entries ("quatre vingt") win over single tokens
    toks = []
    i = 0
    vocab = lex.all_number_tokens
    while i < len(raw):
        if i + 1 < len(raw) and f"{raw[i]} {raw[i+1]}" in vocab:
            toks.append(f"{raw[i]} {raw[i+1]}")
            i += 2
        else:
            toks.append(raw[i])
            i += 1
    return toks

def _parse_number_words_fallback(s: str, g: _Grammar) -> Optional[float]:
    """
    Table-driven parser for number words:
      - additive words accumulate ("twenty one", "diez y ocho")
      - small multipliers scale the pending digit ("three hundred", "四千三百")
      - large multipliers close a section ("two thousand and three", "삼만")
      - joiners are ignored
    Returns None when a token is unknown.
    """
    lex = g.lex
    toks = _number_tokens(s, g)
    if not toks:
        return None
    total = section = digit = 0
    used_any = False
    for tok in toks:
        if tok in g.joiners:
            continue
        if tok in lex.number_words:
            digit += lex.number_words[tok]
        elif tok in lex.small_multipliers:
            section += (digit or 1) * lex.small_multipliers[tok]
            digit = 0
        elif tok in lex.large_multipliers:
            total += ((section + digit) or 1) * lex.large_multipliers[tok]
            section = digit = 0
        else:
            return None
        used_any = True
    if not used_any:
        return None
    return float(total + section + digit)

def _parse_number_words(s: str, g: _Grammar, use_number_parser: bool = True) -> Optional[float]:
    code = _NUMBER_PARSER_LANGS.get(g.lex.language)
    if use_number_parser and code is not None:
        try:
            val = parse_number(s, language=code)
        except Exception:
            val = None
        if isinstance(val, (int, float)) and not isinstance(val, bool):
            return float(val)
    return _parse_number_words_fallback(s, g)

def _parse_number_text(s: Optional[str], g: _Grammar, use_number_parser: bool = True) -> Optional[float]:
    if not s:
        return None
    if any(ch.isdigit() for ch in s):
        try:
            return _parse_digits(s, g.lex)
        except ValueError:
            return None
    return _parse_number_words(s, g, use_number_parser)

# =========================
# Time helpers
# =========================
def _truncate(dt: datetime, grain: Grain) -> datetime:
    if grain == Grain.Second:
        return dt.replace(microsecond=0)
    if grain == Grain.Minute:
        return dt.replace(second=0, microsecond=0)
    if grain == Grain.Hour:
        return dt.replace(minute=0, second=0, microsecond=0)
    day = dt.replace(hour=0, minute=0, second=0, microsecond=0)
    if grain == Grain.Day:
        return day
    if grain == Grain.Week:
        return day - timedelta(days=day.weekday())
    if grain == Grain.Month:
        return day.replace(day=1)
    if grain == Grain.Quarter:
        return day.replace(month=3 * ((day.month - 1) // 3) + 1, day=1)
    return day.replace(month=1, day=1)

def _add_months(dt: datetime, months: int) -> datetime:
    y, m = divmod(dt.month - 1 + months, 12)
    year, month = dt.year + y, m + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)

def _shift(dt: datetime, comps: Mapping[str, int], sign: int = 1) -> datetime:
    months = 12 * comps.get("years", 0) + 3 * comps.get("quarters", 0) + comps.get("months", 0)
    dt = _add_months(dt, sign * months)
    return dt + sign * timedelta(
        weeks=comps.get("weeks", 0), days=comps.get("days", 0), hours=comps.get("hours", 0),
        minutes=comps.get("minutes", 0), seconds=comps.get("seconds", 0),
    )

_GRAIN_STEP = {
    Grain.Year: {"years": 1}, Grain.Quarter: {"quarters": 1}, Grain.Month: {"months": 1},
    Grain.Week: {"weeks": 1}, Grain.Day: {"days": 1}, Grain.Hour: {"hours": 1},
    Grain.Minute: {"minutes": 1}, Grain.Second: {"seconds": 1},
}

def _next_grain(dt: datetime, grain: Grain) -> datetime:
    return _shift(dt, _GRAIN_STEP[grain])

@dataclass(frozen=True)
class _Instant:
    start: int
    end: int
    moment: datetime
    grain: Grain
    precision: Precision = Precision.Exact
    day_like: bool = False

# =========================
# Engine
# =========================
class RuleEngine:
    """Regex/lexicon engine for one language. Read-only after construction."""

    def __init__(self, language: Language, config: ParserConfig = DEFAULT_CONFIG):
        self.language = Language.from_code(language)
        self.config = config
        self.tz = ZoneInfo(config.timezone)
        self._future = config.prefer_dates_from == "future"
        self.grammar = _Grammar(lexicon_for(self.language))
        logger.debug("engine: compiled grammar for %s (tz=%s)", self.language, config.timezone)

    def reference_time(self) -> datetime:
        ref = self.config.reference_time
        if ref is None:
            return datetime.now(self.tz)
        if ref.tzinfo is None:
            return ref.replace(tzinfo=self.tz)
        return ref.astimezone(self.tz)

    def parse(self, text: str) -> List[RawMatch]:
        ref = self.reference_time()
        out: List[RawMatch] = []
        out += self._extract_numbers(text)
        out += self._extract_ordinals(text)
        out += self._extract_percentages(text)
        out += self._extract_money(text)
        out += self._extract_temperatures(text)
        durations = self._duration_spans(text)
        for start, end, comps, precision in durations:
            out.append(RawMatch(_KIND.Duration, "duration", start, end,
                                {"period": comps, "precision": precision.value}, "duration"))
        out += self._extract_time(text, ref, durations)

        seen = set()
        uniq: List[RawMatch] = []
        for m in sorted(out, key=lambda r: (r.start, -r.end)):
            k = (m.entity_kind, m.start, m.end, m.output)
            if k in seen:
                continue
            seen.add(k)
            uniq.append(m)
        logger.debug("engine[%s]: %d raw matches in %r", self.language, len(uniq), text)
        return uniq

    # ---------- numbers ----------
    def _num(self, s: Optional[str]) -> Optional[float]:
        return _parse_number_text(s, self.grammar, self.config.use_number_parser)

    def _extract_numbers(self, text: str) -> List[RawMatch]:
        g = self.grammar
        out: List[RawMatch] = []
        for m in g.digits_rx.finditer(text):
            s = m.group(0)
            try:
                v = _parse_digits(s, g.lex)
            except ValueError:
                continue
            is_float = (("," if g.lex.decimal_comma else ".") in s)
            out.append(RawMatch(_KIND.Number, "float" if is_float else "integer",
                                m.start(), m.end(), {"value": v}, "number-digits"))
        articles = {_key(a) for a in g.lex.unit_articles}
        for m in g.words_rx.finditer(text):
            s = m.group(0)
            if _key(s) in articles or _key(s) in g.joiners:
                continue
            v = self._num(s)
            if v is None:
                logger.debug("numwords: could not parse %r", s)
                continue
            out.append(RawMatch(_KIND.Number, "integer" if v.is_integer() else "float",
                                m.start(), m.end(), {"value": v}, "number-words"))
        return out

    def _extract_ordinals(self, text: str) -> List[RawMatch]:
        g = self.grammar
        out: List[RawMatch] = []
        for m in g.ordinal_digits_rx.finditer(text):
            out.append(RawMatch(_KIND.Ordinal, "ordinal", m.start(), m.end(),
                                {"value": int(m.group("n"))}, "ordinal-digits"))
        for m in g.ordinal_words_rx.finditer(text):
            base = g.lex.ordinal_words.get(_key(m.group("ord")))
            if base is None:
                continue
            start, value = m.start(), base
            pre = m.group("pre")
            if pre:
                pre_val = self._num(pre)
                # "twenty third" and "zweiundzwanzigster" combine, "one second" does not
                tens_first = pre_val is not None and pre_val > base and pre_val % 10 == 0
                units_first = (g.lex.compound and pre_val is not None
                               and pre_val < 10 and base >= 20 and base % 10 == 0)
                if tens_first or units_first:
                    value = int(pre_val) + base
                else:
                    start = m.start("ord")
            out.append(RawMatch(_KIND.Ordinal, "ordinal", start, m.end(),
                                {"value": value}, "ordinal-words"))
        return out

    def _extract_percentages(self, text: str) -> List[RawMatch]:
        out: List[RawMatch] = []
        for m in self.grammar.percent_rx.finditer(text):
            v = self._num(m.group("num"))
            if v is None:
                continue
            out.append(RawMatch(_KIND.Percentage, "percentage", m.start(), m.end(),
                                {"value": v}, "percent"))
        return out

    # ---------- money ----------
    def _amount(self, s: str) -> Optional[float]:
        if not any(ch.isdigit() for ch in s):
            return self._num(s)
        sep = "," if self.grammar.lex.decimal_comma else "."
        price = Price.fromstring(s, decimal_separator=sep)
        if price.amount_float is not None:
            return price.amount_float
        return self._num(s)

    def _extract_money(self, text: str) -> List[RawMatch]:
        g = self.grammar
        out: List[RawMatch] = []
        for m in g.money_rx.finditer(text):
            if m.group("sym"):
                unit = m.group("sym")
            else:
                unit = g.lex.currencies.get(_key(m.group("cur")))
            amount = self._amount(m.group("num"))
            if amount is None:
                continue
            if m.group("cw"):
                cents = self._num(m.group("cnum"))
                if cents is None:
                    continue
                amount = round(amount + cents / 100.0, 2)
            precision = Precision.Approximate if m.group("approx") else Precision.Exact
            logger.debug("money: %r -> %s %s (%s)", m.group(0), amount, unit, precision.value)
            out.append(RawMatch(_KIND.AmountOfMoney, "amount_of_money", m.start(), m.end(),
                                {"value": amount, "unit": unit, "precision": precision.value}, "money"))
        taken = [(r.start, r.end) for r in out]
        for m in g.cents_rx.finditer(text):
            if any(s <= m.start() and m.end() <= e for s, e in taken):
                continue
            v = self._num(m.group("num"))
            if v is None:
                continue
            out.append(RawMatch(_KIND.AmountOfMoney, "amount_of_money", m.start(), m.end(),
                                {"value": v, "unit": "cent"}, "money-cents"))
        return out

    # ---------- temperatures ----------
    def _extract_temperatures(self, text: str) -> List[RawMatch]:
        g = self.grammar
        out: List[RawMatch] = []
        for m in g.temperature_rx.finditer(text):
            v = self._num(m.group("num"))
            unit = g.temperature_units.get(_key(m.group("unit")))
            if v is None:
                continue
            out.append(RawMatch(_KIND.Temperature, "temperature", m.start(), m.end(),
                                {"value": v, "unit": unit}, "temperature"))
        if g.temperature_prefix_rx is not None:
            for m in g.temperature_prefix_rx.finditer(text):
                v = self._num(m.group("num"))
                if v is None:
                    continue
                unit = g.lex.temperature_prefixes.get(_key(m.group("pre")))
                out.append(RawMatch(_KIND.Temperature, "temperature", m.start(), m.end(),
                                    {"value": v, "unit": unit}, "temperature-prefix"))
        return out

    # ---------- durations ----------
    _FRACTION_DOWN = {"weeks": ("days", 7), "days": ("hours", 24), "hours": ("minutes", 60), "minutes": ("seconds", 60)}

    def _duration_components(self, chain: str) -> Optional[Dict[str, int]]:
        g = self.grammar
        comps: Dict[str, int] = {}
        for pm in g.duration_piece_rx.finditer(chain):
            unit = g.lex.duration_units.get(_key(pm.group("unit")))
            val = 1.0 if pm.group("art") is not None else self._num(pm.group("num"))
            if unit is None or val is None:
                return None
            if not float(val).is_integer():
                if unit not in self._FRACTION_DOWN:
                    return None
                unit, factor = self._FRACTION_DOWN[unit]
                val = round(val * factor, 6)
                if not float(val).is_integer():
                    return None
            comps[unit] = comps.get(unit, 0) + int(val)
        return comps or None

    def _duration_spans(self, text: str) -> List[Tuple[int, int, Dict[str, int], Precision]]:
        g = self.grammar
        out = []
        for m in g.duration_rx.finditer(text):
            if m.group("fixed"):
                comps = dict(g.fixed_durations.get(_key(m.group("fixed")), {}))
            else:
                comps = self._duration_components(m.group("chain"))
            if not comps:
                continue
            precision = Precision.Approximate if m.group("approx") else Precision.Exact
            logger.debug("duration: %r -> %r", m.group(0), comps)
            out.append((m.start(), m.end(), comps, precision))
        return out

    # ---------- time ----------
    def _dateparser(self, frag: str, ref: datetime) -> Optional[datetime]:
        settings = {
            "PREFER_DATES_FROM": self.config.prefer_dates_from,
            "PREFER_DAY_OF_MONTH": "first",
            "RELATIVE_BASE": ref.replace(tzinfo=None),
            "RETURN_AS_TIMEZONE_AWARE": False,
        }
        try:
            dt = dateparser.parse(frag, languages=[self.language.code], settings=settings)
        except Exception:
            dt = None
        logger.debug("date: dateparser %r -> %r", frag, dt)
        return dt.replace(tzinfo=self.tz) if dt is not None else None

    def _future_date(self, ref: datetime, month: int, day: int, year: Optional[int]) -> Optional[datetime]:
        try:
            dt = ref.replace(year=year or ref.year, month=month, day=day,
                             hour=0, minute=0, second=0, microsecond=0)
        except ValueError:
            return None
        if year is None and self._future and dt < _truncate(ref, Grain.Day):
            try:
                dt = dt.replace(year=dt.year + 1)
            except ValueError:
                return None
        return dt

    def _nth_weekday(self, ref: datetime, month: int, weekday: int, nth: int,
                     year: Optional[int]) -> Optional[datetime]:
        if nth < 1:
            return None

        def pick(y: int) -> Optional[datetime]:
            first = ref.replace(year=y, month=month, day=1, hour=0, minute=0, second=0, microsecond=0)
            day = 1 + (weekday - first.weekday()) % 7 + 7 * (nth - 1)
            if day > calendar.monthrange(y, month)[1]:
                return None
            return first.replace(day=day)

        try:
            dt = pick(year or ref.year)
            if year is None and self._future and (dt is None or dt < _truncate(ref, Grain.Day)):
                dt = pick(ref.year + 1)
        except ValueError:
            return None
        return dt

    def _instants(self, text: str, ref: datetime, durations) -> List[_Instant]:
        g = self.grammar
        today = _truncate(ref, Grain.Day)
        out: List[_Instant] = []

        for m in g.day_rx.finditer(text):
            offset = g.day_words.get(_key(m.group(0)))
            if offset is None:
                continue
            out.append(_Instant(m.start(), m.end(), today + timedelta(days=offset), Grain.Day, day_like=True))

        for m in g.weekday_rx.finditer(text):
            target = g.weekdays.get(_key(m.group("wd")))
            if target is None:
                continue
            delta = (target - today.weekday()) % 7
            if delta == 0 and (m.group("next") or self._future):
                delta = 7
            out.append(_Instant(m.start(), m.end(), today + timedelta(days=delta), Grain.Day, day_like=True))

        if g.nth_weekday_rx is not None:
            for m in g.nth_weekday_rx.finditer(text):
                nth = g.lex.ordinal_words.get(_key(m.group("ow"))) if m.group("ow") else int(m.group("od"))
                month = g.months.get(_key(m.group("mon"))) if "mon" in m.groupdict() else int(m.group("mo"))
                target = g.weekdays.get(_key(m.group("wd")))
                if nth is None or not month or target is None:
                    continue
                year = m.groupdict().get("y")
                dt = self._nth_weekday(ref, month, target, nth, int(year) if year else None)
                if dt is None:
                    continue
                logger.debug("date: nth weekday %r -> %s", m.group(0), dt)
                out.append(_Instant(m.start(), m.end(), dt, Grain.Day, day_like=True))

        if g.month_rx is not None:
            for m in g.month_rx.finditer(text):
                day = m.group("d") or m.group("d2")
                year = m.group("y")
                if not day and not year:
                    continue
                grain = Grain.Day if day else Grain.Month
                dt = self._dateparser(_strip_ordinals(m.group(0)), ref)
                if dt is None:
                    dt = self._future_date(ref, g.months[_key(m.group("mon"))], int(day or 1),
                                           int(year) if year else None)
                if dt is None:
                    continue
                out.append(_Instant(m.start(), m.end(), _truncate(dt, grain), grain, day_like=bool(day)))

        if g.numeric_date_rx is not None:
            for m in g.numeric_date_rx.finditer(text):
                dt = self._future_date(ref, int(m.group("mo")), int(m.group("d")), None)
                if dt is not None:
                    out.append(_Instant(m.start(), m.end(), dt, Grain.Day, day_like=True))

        for m in g.iso_rx.finditer(text):
            try:
                dt = datetime(int(m.group("y")), int(m.group("mo")), int(m.group("d")),
                              int(m.group("H") or 0), int(m.group("M") or 0), int(m.group("S") or 0),
                              tzinfo=self.tz)
            except ValueError:
                continue
            if m.group("H") is None:
                out.append(_Instant(m.start(), m.end(), dt, Grain.Day, day_like=True))
            else:
                out.append(_Instant(m.start(), m.end(), dt, Grain.Second if m.group("S") else Grain.Minute))

        clocks: List[Tuple[_Instant, int, int]] = []
        for m in g.clock_rx.finditer(text):
            hour, minute = int(m.group("h")), int(m.group("m") or 0)
            ap = (m.groupdict().get("ap") or "").lower().replace(".", "")
            if ap:
                if not 1 <= hour <= 12:
                    continue
                hour = hour % 12 + (12 if ap == "pm" else 0)
            if hour > 23 or minute > 59:
                continue
            dt = ref.replace(hour=hour, minute=minute, second=0, microsecond=0)
            if self._future and dt <= ref:
                dt += timedelta(days=1)
            grain = Grain.Minute if m.group("m") else Grain.Hour
            inst = _Instant(m.start(), m.end(), dt, grain)
            clocks.append((inst, hour, minute))
            out.append(inst)
            pre = g.clock_prefix_rx.search(text, 0, m.start())
            if pre is not None:
                out.append(_Instant(pre.start(), m.end(), dt, grain))

        # date + clock ("tomorrow at 4pm", "4pm tomorrow")
        for d in [i for i in out if i.day_like]:
            for c, hour, minute in clocks:
                if d.end <= c.start and g.at_gap_rx.fullmatch(text, d.end, c.start):
                    start, end = d.start, c.end
                elif c.end <= d.start and g.at_gap_rx.fullmatch(text, c.end, d.start):
                    start, end = c.start, d.end
                else:
                    continue
                out.append(_Instant(start, end, d.moment.replace(hour=hour, minute=minute), c.grain))

        # "in 2 hours", "vor 3 Tagen", "1시간 후"
        for start, end, comps, precision in durations:
            pre_in = g.in_prefix_rx.search(text, 0, start)
            pre_ago = g.ago_prefix_rx.search(text, 0, start)
            suf_later = g.later_suffix_rx.match(text, end)
            suf_ago = g.ago_suffix_rx.match(text, end)
            fine = any(comps.get(k) for k in ("hours", "minutes", "seconds"))
            grain = Grain.Second if fine else Grain.Day
            spans = []
            for hit, sign in ((pre_in, 1), (pre_ago, -1)):
                if hit is not None:
                    spans.append((hit.start(), end, sign))
            for hit, sign in ((suf_later, 1), (suf_ago, -1)):
                if hit is not None:
                    spans.append((start, hit.end(), sign))
            for s, e, sign in spans:
                try:
                    dt = _truncate(_shift(ref, comps, sign), grain)
                except (ValueError, OverflowError) as exc:
                    # the duration itself is still reported
                    logger.debug("time: %r out of datetime range: %s", text[s:e], exc)
                    continue
                out.append(_Instant(s, e, dt, grain, precision))
        return out

    def _extract_time(self, text: str, ref: datetime, durations) -> List[RawMatch]:
        g = self.grammar
        instants = self._instants(text, ref, durations)
        out: List[RawMatch] = []
        for i in instants:
            out.append(RawMatch(_KIND.Time, "datetime", i.start, i.end,
                                {"moment": i.moment, "grain": i.grain.value, "precision": i.precision.value},
                                "time"))

        def interval(start: int, end: int, lo: Optional[datetime], hi: Optional[datetime], src: str):
            out.append(RawMatch(_KIND.Time, "datetime_interval", start, end, {"from": lo, "to": hi}, src))

        # "from 3pm to 5pm", "between monday and friday", "3時から5時まで"
        for a in instants:
            for b in instants:
                if b.start < a.end:
                    continue
                mid = g.interval_mid_rx.fullmatch(text, a.end, b.start)
                if mid is None:
                    continue
                pre = g.interval_from_rx.search(text, 0, a.start)
                if pre is None and _key(mid.group("w")) in g.joiners:
                    continue
                suffix = g.interval_suffix_rx.match(text, b.end)
                start = pre.start() if pre else a.start
                end = suffix.end() if suffix else b.end
                try:
                    hi = _next_grain(b.moment, b.grain)
                except (ValueError, OverflowError):
                    logger.debug("time: no end bound after %s", b.moment)
                    continue
                interval(start, end, a.moment, hi, "time-interval")

        # "after 6pm", "before friday", "5時以降"
        for i in instants:
            after = g.after_rx.search(text, 0, i.start)
            if after is not None:
                interval(after.start(), i.end, i.moment, None, "time-after")
            before = g.before_rx.search(text, 0, i.start)
            if before is not None:
                interval(before.start(), i.end, None, i.moment, "time-before")
            after_s = g.after_suffix_rx.match(text, i.end)
            if after_s is not None:
                interval(i.start, after_s.end(), i.moment, None, "time-after")
            before_s = g.before_suffix_rx.match(text, i.end)
            if before_s is not None:
                interval(i.start, before_s.end(), None, i.moment, "time-before")

        today = _truncate(ref, Grain.Day)
        for m in g.tonight_rx.finditer(text):
            interval(m.start(), m.end(), today.replace(hour=18), today + timedelta(days=1), "time-tonight")
        return out


def build_engine(language: Language, config: ParserConfig = DEFAULT_CONFIG) -> RuleEngine:
    """Default engine factory used by the parser cache."""
    return RuleEngine(language, config)
