"""Localized string tables.

The table file lists a key followed by one ``$...$`` string per language:
``title $名称$ $Title$``.  Whitespace outside the dollar signs is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

CHINESE = 0
ENGLISH = 1


def parse_localization(text: str) -> dict:
    """Map each key to the list of its translations."""
    table: dict = {}
    in_string = False
    current: list = []
    key_chars: list = []
    translations: list = []
    for ch in text:
        if ch == "$":
            if in_string:
                translations.append("".join(current))
                current = []
            in_string = not in_string
        elif in_string:
            current.append(ch)
        elif not ch.isspace():
            if translations:
                table["".join(key_chars)] = translations
                translations = []
                key_chars = []
            key_chars.append(ch)
    if translations:
        table["".join(key_chars)] = translations
    return table


@dataclass
class Localizer:
    """Looks up translations by key and language index."""

    table: dict = field(default_factory=dict)

    @classmethod
    def load(cls, path) -> Localizer:
        """Read a table file; a missing file gives an empty table."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except FileNotFoundError:
            return cls()
        return cls(parse_localization(text))

    def get(self, key: str, language: int = CHINESE) -> str:
        """The translation, or an empty string when there is none."""
        if not key:
            return ""
        translations = self.table.get(key)
        if translations is None or not 0 <= language < len(translations):
            return ""
        return translations[language]