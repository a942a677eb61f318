from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from index.errors import UnknownRuleError

Rule = Callable[[str], str]


@dataclass(frozen=True)
class NormalizationRule:
    """Regex substitution applied to raw text before it is split."""

    pattern: re.Pattern[str]
    replace: str | Callable[[re.Match[str]], str]

    def __call__(self, text: str) -> str:
        return self.pattern.sub(self.replace, text)


_MEASUREMENT = re.compile(
    r"(?P<marker>(?<=\d)x(?=\d)|\.)"
    r"|(?P<measure>(?P<value>\d+)\s*(?P<unit>mm|cm|m|kg|g|ml)\b)"
    r"|(?P<other>[^A-Za-z0-9\s])",
    re.IGNORECASE,
)


def _measurement(m: re.Match[str]) -> str:
    # "25 mm" and "25mm" both become the single token "25mm"
    if m.group("measure"):
        return f" {m.group('value')}{m.group('unit').lower()} "
    return " "


PUNCTUATION = NormalizationRule(re.compile(r"[^A-Za-z0-9\s]+"), " ")
MEASUREMENTS = NormalizationRule(_MEASUREMENT, _measurement)


def _identity(text: str) -> str:
    return text


WHITESPACE: Rule = _identity

RULES: dict[str, Rule] = {
    "punctuation": PUNCTUATION,
    "measurements": MEASUREMENTS,
    "whitespace": WHITESPACE,
}
DEFAULT_RULE: Rule = PUNCTUATION


def get_rule(name: str) -> Rule:
    try:
        return RULES[name.lower()]
    except KeyError:
        raise UnknownRuleError(name) from None


def tokenize(text: str, rule: Rule = DEFAULT_RULE) -> Iterator[str]:
    """Yield lower-cased tokens of ``text`` after applying ``rule``.

    Calling again with the same text and rule yields the same sequence.
    """
    for piece in rule(text).split():
        yield piece.lower()
