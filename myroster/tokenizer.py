"""
Tokenizer (command arguments -> ArgumentMap).

Splits the argument text of a command into:
- a preamble: everything before the first recognized marker prefix
- the values that follow each recognized prefix, in input order

Example:

    tokenize(" 3 Tutorial/2 -date 2024-05-01", "Tutorial/", "-date")
    -> preamble "3", {"Tutorial/": ["2"], "-date": ["2024-05-01"]}

Rules:
- a prefix only counts at the start of the text or right after whitespace
- dash-style prefixes ("-date") must also be followed by whitespace or the end
- text that looks like a prefix but is not in the recognized set stays literal
- values are trimmed of surrounding whitespace

Tokenizing never fails; deciding whether the result makes sense is the
resolver's job.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass
class ArgumentMap:
    """
    Marker prefix -> ordered values, plus the free-text preamble.
    """

    preamble: str = ""
    _values: Dict[str, List[str]] = field(default_factory=dict)

    def put(self, prefix: str, value: str) -> None:
        self._values.setdefault(prefix, []).append(value)

    def values(self, prefix: str) -> List[str]:
        return list(self._values.get(prefix, []))

    def value(self, prefix: str) -> Optional[str]:
        """
        Return the last value given for prefix, or None if it never appeared.
        """
        vals = self._values.get(prefix)
        return vals[-1] if vals else None

    def has(self, prefix: str) -> bool:
        return bool(self._values.get(prefix))

    def prefixes(self) -> List[str]:
        return [p for p, vals in self._values.items() if vals]

    def as_dict(self) -> Dict[str, List[str]]:
        return {p: list(vals) for p, vals in self._values.items()}


def _prefix_pattern(prefix: str) -> "re.Pattern[str]":
    tail = r"(?=\s|$)" if prefix.startswith("-") else ""
    return re.compile(r"(?<!\S)" + re.escape(prefix) + tail)


def _find_positions(text: str, prefixes: Iterable[str], first_only: bool) -> List[Tuple[int, str]]:
    positions: List[Tuple[int, str]] = []
    for prefix in dict.fromkeys(prefixes):
        for match in _prefix_pattern(prefix).finditer(text):
            positions.append((match.start(), prefix))
            if first_only:
                break
    positions.sort()
    return positions


def _split(text: str, positions: List[Tuple[int, str]]) -> ArgumentMap:
    if not positions:
        return ArgumentMap(preamble=text.strip())

    arg_map = ArgumentMap(preamble=text[: positions[0][0]].strip())

    # Value of a prefix runs until the next recognized prefix (or the end)
    for i, (start, prefix) in enumerate(positions):
        end = positions[i + 1][0] if i + 1 < len(positions) else len(text)
        arg_map.put(prefix, text[start + len(prefix) : end].strip())

    return arg_map


def tokenize(text: str, *prefixes: str) -> ArgumentMap:
    """
    Tokenize text, treating every occurrence of every prefix as a marker.
    Repeated prefixes collect multiple values in input order.
    """
    return _split(text, _find_positions(text, prefixes, first_only=False))


def tokenize_first_prefix(text: str, *prefixes: str) -> ArgumentMap:
    """
    Tokenize text, treating only the FIRST occurrence of each prefix as a
    marker. Later repeats of a prefix become literal text of the value
    they appear in, so every prefix has at most one value.
    """
    return _split(text, _find_positions(text, prefixes, first_only=True))
