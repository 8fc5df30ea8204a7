# -*- coding: utf-8 -*-
# lexicon.py

"""
Per-language word tables for the rule-based engine (`extractor.py`).

Every table maps a lowercased surface form to its meaning: number words to
values, unit words to duration components or currency/temperature units, and
so on. Tables are plain immutable data; the engine compiles them into regexes
once per language.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import unicodedata
from typing import Dict, Mapping, Optional, Tuple

from language import Language


def _strip_accents(s: str) -> str:
    return "".join(c for c in unicodedata.normalize("NFD", s) if unicodedata.category(c) != "Mn")

def _with_unaccented(table: Mapping[str, object]) -> Dict[str, object]:
    """Add accent-free spellings ("deuxieme" next to "deuxième")."""
    out = dict(table)
    for k, v in table.items():
        out.setdefault(_strip_accents(k), v)
    return out

def _inflect(table: Mapping[str, int], endings: Tuple[str, ...]) -> Dict[str, int]:
    out: Dict[str, int] = {}
    for k, v in table.items():
        for end in ("",) + endings:
            out.setdefault(k + end, v)
    return out


@dataclass(frozen=True)
class Lexicon:
    language: Language
    # tokenization
    word_boundary: bool = True          # False for scripts without spaces between words
    compound: bool = False              # number words glue together ("einundzwanzig", "四千三百")
    decimal_comma: bool = False         # "2,5" is two and a half
    # numbers
    number_words: Mapping[str, int] = field(default_factory=dict)
    small_multipliers: Mapping[str, int] = field(default_factory=dict)   # hundred, 十, 백 ...
    large_multipliers: Mapping[str, int] = field(default_factory=dict)   # thousand, million, 万 ...
    joiners: Tuple[str, ...] = ()
    number_word_rx: Optional[str] = None
    # ordinals
    ordinal_words: Mapping[str, int] = field(default_factory=dict)
    ordinal_suffix_rx: str = r"(?!)"
    ordinal_prefix_rx: str = r"(?!)"
    ordinal_articles: Tuple[str, ...] = ()     # "the second", "der zweite"
    # percentages, money, temperatures
    percent_rx: str = r"%"
    currencies: Mapping[str, str] = field(default_factory=dict)
    cent_words: Tuple[str, ...] = ()
    approx_words: Tuple[str, ...] = ()
    temperature_units: Mapping[str, str] = field(default_factory=dict)
    temperature_prefixes: Mapping[str, str] = field(default_factory=dict)
    # durations
    duration_units: Mapping[str, str] = field(default_factory=dict)
    unit_articles: Tuple[str, ...] = ()
    fixed_durations: Mapping[str, Mapping[str, int]] = field(default_factory=dict)
    # time
    day_words: Mapping[str, int] = field(default_factory=dict)
    tonight_words: Tuple[str, ...] = ()
    in_prefixes: Tuple[str, ...] = ()
    later_suffixes: Tuple[str, ...] = ()
    ago_prefixes: Tuple[str, ...] = ()
    ago_suffixes: Tuple[str, ...] = ()
    clock_rx: str = r"(?P<h>\d{1,2}):(?P<m>\d{2})"
    at_words: Tuple[str, ...] = ()
    clock_prefixes: Tuple[str, ...] = ()       # part of the clock span ("a la 1:30", "à 14:30")
    months: Mapping[str, int] = field(default_factory=dict)
    weekdays: Mapping[str, int] = field(default_factory=dict)
    next_words: Tuple[str, ...] = ()
    month_links: Tuple[str, ...] = ()          # "3rd tuesday of June"
    month_number_rx: Optional[str] = None      # numeric month before the weekday ("5 월 첫째 목요일")
    numeric_date_rx: Optional[str] = None
    interval_from: Tuple[str, ...] = ()
    interval_to: Tuple[str, ...] = ()
    interval_suffixes: Tuple[str, ...] = ()
    after_words: Tuple[str, ...] = ()
    before_words: Tuple[str, ...] = ()
    after_suffixes: Tuple[str, ...] = ()
    before_suffixes: Tuple[str, ...] = ()

    @property
    def all_number_tokens(self) -> Dict[str, int]:
        out = dict(self.number_words)
        out.update(self.small_multipliers)
        out.update(self.large_multipliers)
        return out

# =========================
# Shared pieces
# =========================
_SYMBOLS = {"$": "$", "€": "€", "£": "£", "¥": "¥", "₩": "₩"}

_TEMP_SYMBOLS = {"°c": "celsius", "°f": "fahrenheit", "°k": "kelvin", "°": "degree"}

_EN_MONTHS = {
    "january": 1, "february": 2, "march": 3, "april": 4, "may": 5, "june": 6,
    "july": 7, "august": 8, "september": 9, "october": 10, "november": 11, "december": 12,
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "jun": 6, "jul": 7, "aug": 8,
    "sep": 9, "sept": 9, "oct": 10, "nov": 11, "dec": 12,
}

# =========================
# English
# =========================
EN = Lexicon(
    language=Language.EN,
    number_words={
        "zero": 0, "one": 1, "two": 2, "three": 3, "four": 4, "five": 5, "six": 6,
        "seven": 7, "eight": 8, "nine": 9, "ten": 10, "eleven": 11, "twelve": 12,
        "thirteen": 13, "fourteen": 14, "fifteen": 15, "sixteen": 16, "seventeen": 17,
        "eighteen": 18, "nineteen": 19, "twenty": 20, "thirty": 30, "forty": 40,
        "fifty": 50, "sixty": 60, "seventy": 70, "eighty": 80, "ninety": 90,
    },
    small_multipliers={"hundred": 100},
    large_multipliers={"thousand": 1000, "million": 1000000, "billion": 1000000000},
    joiners=("and",),
    ordinal_words={
        "first": 1, "second": 2, "third": 3, "fourth": 4, "fifth": 5, "sixth": 6,
        "seventh": 7, "eighth": 8, "ninth": 9, "tenth": 10, "eleventh": 11, "twelfth": 12,
        "thirteenth": 13, "fourteenth": 14, "fifteenth": 15, "sixteenth": 16,
        "seventeenth": 17, "eighteenth": 18, "nineteenth": 19, "twentieth": 20,
        "thirtieth": 30, "fortieth": 40, "fiftieth": 50, "sixtieth": 60,
        "seventieth": 70, "eightieth": 80, "ninetieth": 90, "hundredth": 100,
    },
    ordinal_suffix_rx=r"(?:st|nd|rd|th)\b",
    ordinal_articles=("the",),
    percent_rx=r"%|per\s?cents?|percents?",
    currencies={
        **_SYMBOLS,
        "dollars": "$", "dollar": "$", "bucks": "$", "usd": "$",
        "euros": "€", "euro": "€", "eur": "€",
        "pounds": "£", "pound": "£", "gbp": "£",
        "yen": "¥", "jpy": "¥", "won": "₩", "krw": "₩",
    },
    cent_words=("cents", "cent"),
    approx_words=("about", "around", "approximately", "roughly", "almost", "nearly", "~"),
    temperature_units={
        **_TEMP_SYMBOLS,
        "degrees celsius": "celsius", "degree celsius": "celsius",
        "degrees fahrenheit": "fahrenheit", "degree fahrenheit": "fahrenheit",
        "degrees kelvin": "kelvin", "degrees": "degree", "degree": "degree",
        "celsius": "celsius", "fahrenheit": "fahrenheit", "kelvin": "kelvin",
    },
    duration_units={
        "seconds": "seconds", "second": "seconds", "secs": "seconds", "sec": "seconds", "s": "seconds",
        "minutes": "minutes", "minute": "minutes", "mins": "minutes", "min": "minutes",
        "hours": "hours", "hour": "hours", "hrs": "hours", "hr": "hours", "h": "hours",
        "days": "days", "day": "days",
        "weeks": "weeks", "week": "weeks",
        "months": "months", "month": "months",
        "quarters": "quarters", "quarter": "quarters",
        "years": "years", "year": "years", "yrs": "years", "yr": "years",
    },
    unit_articles=("an", "a"),
    fixed_durations={
        "half an hour": {"minutes": 30},
        "half a minute": {"seconds": 30},
        "half a day": {"hours": 12},
        "a quarter of an hour": {"minutes": 15},
    },
    day_words={"day after tomorrow": 2, "day before yesterday": -2, "today": 0, "tomorrow": 1, "yesterday": -1},
    tonight_words=("tonight",),
    in_prefixes=("in", "within"),
    ago_suffixes=("ago",),
    clock_rx=(
        r"(?P<h>\d{1,2})(?::(?P<m>\d{2}))?\s*(?P<ap>[ap]\.?m\b\.?)"
        r"|(?P<h>\d{1,2}):(?P<m>\d{2})(?!\d)"
    ),
    at_words=("at",),
    months=_EN_MONTHS,
    weekdays={
        "monday": 0, "tuesday": 1, "wednesday": 2, "thursday": 3, "friday": 4, "saturday": 5, "sunday": 6,
    },
    next_words=("next", "this"),
    month_links=("of", "in"),
    interval_from=("from", "between"),
    interval_to=("to", "until", "till", "through", "and", "-"),
    after_words=("after", "since"),
    before_words=("before", "until", "till"),
)

# =========================
# German
# =========================
DE = Lexicon(
    language=Language.DE,
    compound=True,
    decimal_comma=True,
    number_words={
        "null": 0, "eins": 1, "ein": 1, "eine": 1, "zwei": 2, "drei": 3, "vier": 4, "fünf": 5,
        "sechs": 6, "sieben": 7, "acht": 8, "neun": 9, "zehn": 10, "elf": 11, "zwölf": 12,
        "dreizehn": 13, "vierzehn": 14, "fünfzehn": 15, "sechzehn": 16, "siebzehn": 17,
        "achtzehn": 18, "neunzehn": 19, "zwanzig": 20, "dreißig": 30, "vierzig": 40,
        "fünfzig": 50, "sechzig": 60, "siebzig": 70, "achtzig": 80, "neunzig": 90,
    },
    small_multipliers={"hundert": 100},
    large_multipliers={"tausend": 1000, "millionen": 1000000, "million": 1000000,
                       "milliarden": 1000000000, "milliarde": 1000000000},
    joiners=("und",),
    ordinal_words=_inflect({
        "erste": 1, "zweite": 2, "dritte": 3, "vierte": 4, "fünfte": 5, "sechste": 6,
        "siebte": 7, "achte": 8, "neunte": 9, "zehnte": 10, "elfte": 11, "zwölfte": 12,
        "dreizehnte": 13, "vierzehnte": 14, "fünfzehnte": 15, "sechzehnte": 16,
        "siebzehnte": 17, "achtzehnte": 18, "neunzehnte": 19, "zwanzigste": 20,
        "dreißigste": 30, "vierzigste": 40, "fünfzigste": 50, "hundertste": 100,
    }, ("r", "n", "s", "m")),
    ordinal_suffix_rx=r"\.(?!\d)",
    ordinal_articles=("der", "die", "das", "den", "dem", "des"),
    percent_rx=r"%|prozent",
    currencies={
        **_SYMBOLS,
        "dollars": "$", "dollar": "$", "usd": "$",
        "euros": "€", "euro": "€", "eur": "€",
        "pfund": "£", "yen": "¥",
    },
    cent_words=("cents", "cent"),
    approx_words=("ungefähr", "etwa", "circa", "ca.", "rund", "zirka"),
    temperature_units={
        **_TEMP_SYMBOLS,
        "grad celsius": "celsius", "grad fahrenheit": "fahrenheit", "grad kelvin": "kelvin",
        "grad": "degree", "celsius": "celsius", "fahrenheit": "fahrenheit", "kelvin": "kelvin",
    },
    duration_units={
        "sekunden": "seconds", "sekunde": "seconds", "sek": "seconds",
        "minuten": "minutes", "minute": "minutes", "min": "minutes",
        "stunden": "hours", "stunde": "hours", "stdn": "hours", "std": "hours", "h": "hours",
        "tagen": "days", "tage": "days", "tag": "days",
        "wochen": "weeks", "woche": "weeks",
        "monaten": "months", "monate": "months", "monat": "months",
        "quartalen": "quarters", "quartale": "quarters", "quartal": "quarters",
        "jahren": "years", "jahre": "years", "jahr": "years",
    },
    unit_articles=("einen", "einer", "eine", "ein"),
    fixed_durations={
        "eine halbe stunde": {"minutes": 30},
        "ein halbe stunde": {"minutes": 30},
        "einer halben stunde": {"minutes": 30},
        "halbe stunde": {"minutes": 30},
        "eine viertelstunde": {"minutes": 15},
    },
    day_words={"übermorgen": 2, "vorgestern": -2, "heute": 0, "morgen": 1, "gestern": -1},
    tonight_words=("heute abend", "heute nacht"),
    in_prefixes=("in",),
    ago_prefixes=("vor",),
    clock_rx=(
        r"(?P<h>\d{1,2})(?:[.:](?P<m>\d{2}))?\s*uhr\b"
        r"|(?P<h>\d{1,2}):(?P<m>\d{2})(?!\d)"
    ),
    at_words=("um",),
    months={
        "januar": 1, "februar": 2, "märz": 3, "april": 4, "mai": 5, "juni": 6, "juli": 7,
        "august": 8, "september": 9, "oktober": 10, "november": 11, "dezember": 12,
        "jan": 1, "feb": 2, "apr": 4, "jun": 6, "jul": 7, "aug": 8, "sep": 9, "okt": 10, "nov": 11, "dez": 12,
    },
    weekdays={
        "montag": 0, "dienstag": 1, "mittwoch": 2, "donnerstag": 3, "freitag": 4, "samstag": 5, "sonntag": 6,
    },
    next_words=("nächsten", "nächster", "nächste", "am", "diesen"),
    month_links=("im", "in", "des"),
    interval_from=("von", "zwischen", "ab"),
    interval_to=("bis", "und", "-"),
    after_words=("nach", "ab", "seit"),
    before_words=("vor", "bis"),
)

# =========================
# Spanish
# =========================
ES = Lexicon(
    language=Language.ES,
    decimal_comma=True,
    number_words=_with_unaccented({
        "cero": 0, "uno": 1, "una": 1, "un": 1, "dos": 2, "tres": 3, "cuatro": 4, "cinco": 5,
        "seis": 6, "siete": 7, "ocho": 8, "nueve": 9, "diez": 10, "once": 11, "doce": 12,
        "trece": 13, "catorce": 14, "quince": 15, "dieciséis": 16, "diecisiete": 17,
        "dieciocho": 18, "diecinueve": 19, "veinte": 20, "veintiuno": 21, "veintidós": 22,
        "veintitrés": 23, "veinticuatro": 24, "veinticinco": 25, "veintiséis": 26,
        "veintisiete": 27, "veintiocho": 28, "veintinueve": 29, "treinta": 30,
        "cuarenta": 40, "cincuenta": 50, "sesenta": 60, "setenta": 70, "ochenta": 80,
        "noventa": 90, "doscientos": 200, "trescientos": 300, "cuatrocientos": 400,
        "quinientos": 500, "seiscientos": 600, "setecientos": 700, "ochocientos": 800,
        "novecientos": 900,
    }),
    small_multipliers={"cien": 100, "ciento": 100},
    large_multipliers={"mil": 1000, "millones": 1000000, "millón": 1000000, "millon": 1000000},
    joiners=("y",),
    ordinal_words=_with_unaccented({
        "primer": 1, "primero": 1, "primera": 1, "segundo": 2, "segunda": 2,
        "tercer": 3, "tercero": 3, "tercera": 3, "cuarto": 4, "cuarta": 4,
        "quinto": 5, "quinta": 5, "sexto": 6, "sexta": 6, "séptimo": 7, "séptima": 7,
        "octavo": 8, "octava": 8, "noveno": 9, "novena": 9, "décimo": 10, "décima": 10,
        "vigésimo": 20, "vigésima": 20,
    }),
    ordinal_suffix_rx=r"(?:º|ª|\.?er|\.?o|\.?a)\b",
    ordinal_articles=("el", "la", "los", "las"),
    percent_rx=r"%|por\s?cientos?|porcientos?",
    currencies=_with_unaccented({
        **_SYMBOLS,
        "dólares": "$", "dólar": "$", "euros": "€", "euro": "€", "libras": "£", "yenes": "¥",
    }),
    cent_words=("centavos", "céntimos", "centimos", "centavo"),
    approx_words=("alrededor de", "aproximadamente", "cerca de", "unos", "unas"),
    temperature_units=_with_unaccented({
        **_TEMP_SYMBOLS,
        "grados celsius": "celsius", "grados centígrados": "celsius", "grados fahrenheit": "fahrenheit",
        "grados kelvin": "kelvin", "grados": "degree", "grado": "degree",
    }),
    duration_units=_with_unaccented({
        "segundos": "seconds", "segundo": "seconds", "seg": "seconds",
        "minutos": "minutes", "minuto": "minutes", "min": "minutes",
        "horas": "hours", "hora": "hours", "h": "hours",
        "días": "days", "día": "days",
        "semanas": "weeks", "semana": "weeks",
        "meses": "months", "mes": "months",
        "trimestres": "quarters", "trimestre": "quarters",
        "años": "years", "año": "years",
    }),
    unit_articles=("una", "un"),
    fixed_durations={"media hora": {"minutes": 30}, "un cuarto de hora": {"minutes": 15}},
    day_words=_with_unaccented({"pasado mañana": 2, "anteayer": -2, "hoy": 0, "mañana": 1, "ayer": -1}),
    tonight_words=("esta noche",),
    in_prefixes=("dentro de", "en"),
    ago_prefixes=("hace",),
    clock_rx=r"(?P<h>\d{1,2}):(?P<m>\d{2})(?!\d)",
    at_words=("a las", "a la"),
    clock_prefixes=("a las", "a la"),
    months={
        "enero": 1, "febrero": 2, "marzo": 3, "abril": 4, "mayo": 5, "junio": 6, "julio": 7,
        "agosto": 8, "septiembre": 9, "setiembre": 9, "octubre": 10, "noviembre": 11, "diciembre": 12,
    },
    weekdays=_with_unaccented({
        "lunes": 0, "martes": 1, "miércoles": 2, "jueves": 3, "viernes": 4, "sábado": 5, "domingo": 6,
    }),
    next_words=("el próximo", "el proximo", "próximo", "proximo", "el"),
    month_links=("de", "del"),
    interval_from=("desde", "entre", "de"),
    interval_to=("hasta", "a", "y", "-"),
    after_words=("después de", "despues de", "desde"),
    before_words=("antes de", "hasta"),
)

# =========================
# French
# =========================
FR = Lexicon(
    language=Language.FR,
    decimal_comma=True,
    number_words=_with_unaccented({
        "zéro": 0, "un": 1, "une": 1, "deux": 2, "trois": 3, "quatre": 4, "cinq": 5, "six": 6,
        "sept": 7, "huit": 8, "neuf": 9, "dix": 10, "onze": 11, "douze": 12, "treize": 13,
        "quatorze": 14, "quinze": 15, "seize": 16, "vingt": 20, "trente": 30,
        "quarante": 40, "cinquante": 50, "soixante": 60,
        "quatre-vingt": 80, "quatre-vingts": 80, "quatre vingt": 80, "quatre vingts": 80,
    }),
    small_multipliers={"cent": 100, "cents": 100},
    large_multipliers={"mille": 1000, "million": 1000000, "millions": 1000000,
                       "milliard": 1000000000, "milliards": 1000000000},
    joiners=("et",),
    ordinal_words=_with_unaccented({
        "premier": 1, "première": 1, "unième": 1, "deuxième": 2, "second": 2, "seconde": 2,
        "troisième": 3, "quatrième": 4, "cinquième": 5, "sixième": 6, "septième": 7,
        "huitième": 8, "neuvième": 9, "dixième": 10, "onzième": 11, "douzième": 12,
        "treizième": 13, "quatorzième": 14, "quinzième": 15, "seizième": 16,
        "vingtième": 20, "trentième": 30, "centième": 100,
    }),
    ordinal_suffix_rx=r"(?:er|ère|re|ème|eme|e)\b",
    ordinal_articles=("le", "la", "les"),
    percent_rx=r"%|pour\s?cents?|pourcents?",
    currencies=_with_unaccented({
        **_SYMBOLS,
        "dollars": "$", "dollar": "$", "euros": "€", "euro": "€", "livres": "£", "livre": "£", "yens": "¥",
    }),
    cent_words=("centimes", "centime", "cents"),
    approx_words=("environ", "à peu près", "approximativement", "vers", "autour de"),
    temperature_units=_with_unaccented({
        **_TEMP_SYMBOLS,
        "degrés celsius": "celsius", "degrés fahrenheit": "fahrenheit", "degrés kelvin": "kelvin",
        "degré celsius": "celsius", "degrés": "degree", "degré": "degree",
    }),
    duration_units=_with_unaccented({
        "secondes": "seconds", "seconde": "seconds", "sec": "seconds",
        "minutes": "minutes", "minute": "minutes", "min": "minutes",
        "heures": "hours", "heure": "hours", "h": "hours",
        "journées": "days", "journée": "days", "jours": "days", "jour": "days",
        "semaines": "weeks", "semaine": "weeks",
        "mois": "months",
        "trimestres": "quarters", "trimestre": "quarters",
        "années": "years", "année": "years", "ans": "years", "an": "years",
    }),
    unit_articles=("une", "un"),
    fixed_durations={
        "une demi heure": {"minutes": 30}, "une demi-heure": {"minutes": 30},
        "une demie heure": {"minutes": 30}, "un quart d'heure": {"minutes": 15},
    },
    day_words={"après-demain": 2, "avant-hier": -2, "aujourd'hui": 0, "demain": 1, "hier": -1},
    tonight_words=("ce soir", "cette nuit"),
    in_prefixes=("dans", "d'ici"),
    ago_prefixes=("il y a",),
    clock_rx=(
        r"(?P<h>\d{1,2})\s*h\s*(?P<m>\d{2})(?!\d)"
        r"|(?P<h>\d{1,2}):(?P<m>\d{2})(?!\d)"
    ),
    at_words=("à",),
    clock_prefixes=("à",),
    months=_with_unaccented({
        "janvier": 1, "février": 2, "mars": 3, "avril": 4, "mai": 5, "juin": 6, "juillet": 7,
        "août": 8, "septembre": 9, "octobre": 10, "novembre": 11, "décembre": 12,
    }),
    weekdays={"lundi": 0, "mardi": 1, "mercredi": 2, "jeudi": 3, "vendredi": 4, "samedi": 5, "dimanche": 6},
    next_words=("prochain", "le"),
    month_links=("de", "du", "en"),
    interval_from=("entre", "de", "du"),
    interval_to=("jusqu'à", "au", "à", "et", "-"),
    after_words=("après", "à partir de", "depuis"),
    before_words=("avant", "jusqu'à"),
)

# =========================
# Japanese
# =========================
JA = Lexicon(
    language=Language.JA,
    word_boundary=False,
    compound=True,
    number_words={"零": 0, "〇": 0, "一": 1, "二": 2, "三": 3, "四": 4, "五": 5,
                  "六": 6, "七": 7, "八": 8, "九": 9},
    small_multipliers={"十": 10, "百": 100, "千": 1000},
    large_multipliers={"万": 10000, "億": 100000000},
    number_word_rx=r"[零〇一二三四五六七八九十百千万億]+",
    ordinal_suffix_rx=r"(?:番目|番)",
    ordinal_prefix_rx=r"第",
    percent_rx=r"%|％|パーセント",
    currencies={**_SYMBOLS, "円": "¥", "ドル": "$", "ユーロ": "€", "ポンド": "£"},
    approx_words=("約", "およそ", "だいたい"),
    temperature_units={**_TEMP_SYMBOLS, "度": "degree", "℃": "celsius"},
    temperature_prefixes={"摂氏": "celsius", "華氏": "fahrenheit"},
    duration_units={
        "秒間": "seconds", "秒": "seconds", "分間": "minutes", "分": "minutes", "時間": "hours",
        "日間": "days", "日": "days", "週間": "weeks", "ヶ月": "months", "か月": "months",
        "カ月": "months", "ヵ月": "months", "年間": "years", "年": "years",
    },
    day_words={"明後日": 2, "一昨日": -2, "今日": 0, "明日": 1, "昨日": -1},
    tonight_words=("今夜", "今晩"),
    later_suffixes=("後", "後に"),
    ago_suffixes=("前",),
    clock_rx=r"(?P<h>\d{1,2})時(?!間)(?:(?P<m>\d{1,2})分)?|(?P<h>\d{1,2}):(?P<m>\d{2})(?!\d)",
    numeric_date_rx=r"(?P<mo>\d{1,2})月(?P<d>\d{1,2})日",
    interval_to=("から", "〜", "~", "-"),
    interval_suffixes=("まで",),
    after_suffixes=("以降",),
    before_suffixes=("まで",),
)

# =========================
# Korean
# =========================
KO = Lexicon(
    language=Language.KO,
    word_boundary=False,
    compound=True,
    number_words={
        "하나": 1, "한": 1, "둘": 2, "두": 2, "셋": 3, "세": 3, "넷": 4, "네": 4, "다섯": 5,
        "여섯": 6, "일곱": 7, "여덟": 8, "아홉": 9, "열": 10, "스물": 20, "스무": 20,
        "서른": 30, "마흔": 40, "쉰": 50, "예순": 60, "일흔": 70, "여든": 80, "아흔": 90,
        "일": 1, "이": 2, "삼": 3, "사": 4, "오": 5, "육": 6, "칠": 7, "팔": 8, "구": 9,
    },
    small_multipliers={"십": 10, "백": 100, "천": 1000},
    large_multipliers={"만": 10000, "억": 100000000},
    # lone sino-korean digits are particles more often than numbers: require a multiplier
    number_word_rx=(
        r"(?:(?:[일이삼사오육칠팔구]?[십백천만억])+[일이삼사오육칠팔구]?"
        r"|하나|둘|셋|넷|다섯|여섯|일곱|여덟|아홉|열|스물|서른|마흔|쉰|예순|일흔|여든|아흔)"
        r"(?:\s+(?:(?:[일이삼사오육칠팔구]?[십백천만억])+[일이삼사오육칠팔구]?"
        r"|하나|둘|셋|넷|다섯|여섯|일곱|여덟|아홉|열|스물|서른|마흔|쉰|예순|일흔|여든|아흔))*"
    ),
    ordinal_words={
        "첫번째": 1, "첫째": 1, "첫": 1, "두번째": 2, "둘째": 2, "세번째": 3, "셋째": 3,
        "네번째": 4, "넷째": 4, "다섯번째": 5, "다섯째": 5, "여섯번째": 6, "일곱번째": 7,
        "여덟번째": 8, "아홉번째": 9, "열번째": 10,
    },
    ordinal_suffix_rx=r"\s*번째",
    percent_rx=r"%|퍼센트|프로",
    currencies={**_SYMBOLS, "달러": "$", "불": "$", "유로": "€", "원": "₩", "엔": "¥", "파운드": "£"},
    cent_words=("센트",),
    approx_words=("약", "대략"),
    temperature_units={**_TEMP_SYMBOLS, "도": "degree"},
    temperature_prefixes={"섭씨": "celsius", "화씨": "fahrenheit"},
    duration_units={
        "초": "seconds", "분": "minutes", "시간": "hours", "일": "days", "주일": "weeks",
        "주": "weeks", "개월": "months", "달": "months", "년": "years",
    },
    fixed_durations={"양일": {"days": 2}, "반나절": {"hours": 6}},
    day_words={"모레": 2, "그저께": -2, "오늘": 0, "내일": 1, "어제": -1},
    tonight_words=("오늘 밤", "오늘밤"),
    later_suffixes=("후에", "후", "뒤에", "뒤"),
    ago_suffixes=("전에", "전"),
    clock_rx=r"(?P<h>\d{1,2})\s*시(?!간)(?:\s*(?P<m>\d{1,2})\s*분)?(?:에)?|(?P<h>\d{1,2}):(?P<m>\d{2})(?!\d)",
    numeric_date_rx=r"(?P<mo>\d{1,2})\s*월\s*(?P<d>\d{1,2})\s*일",
    weekdays={"월요일": 0, "화요일": 1, "수요일": 2, "목요일": 3, "금요일": 4, "토요일": 5, "일요일": 6},
    month_number_rx=r"(?<!\d)(?P<mo>\d{1,2})\s*월",
    interval_to=("부터", "에서", "~", "-"),
    interval_suffixes=("까지",),
    after_suffixes=("이후",),
    before_suffixes=("까지",),
)

LEXICONS: Dict[Language, Lexicon] = {lex.language: lex for lex in (DE, EN, ES, FR, JA, KO)}

def lexicon_for(language: Language) -> Lexicon:
    return LEXICONS[Language.from_code(language)]
