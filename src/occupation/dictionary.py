from __future__ import annotations

import json
import warnings
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from src.config.constants import OTHER_FIELD


class CategoryDictionaryError(ValueError):
    """Raised when the occupation field dictionary is empty or malformed."""


@dataclass(frozen=True)
class FieldRule:
    name: str
    keywords: tuple[str, ...]


@dataclass(frozen=True)
class CategoryDictionary:
    """
    Ordered (field, keywords) rules. Earlier rules win, and within a rule
    earlier keywords win. Keywords are stored lower-cased.
    """
    rules: tuple[FieldRule, ...]

    @property
    def names(self) -> list[str]:
        return [r.name for r in self.rules]

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)

    @classmethod
    def from_entries(cls, entries: Iterable[tuple[str, Iterable[str]]]) -> "CategoryDictionary":
        rules: list[FieldRule] = []
        seen_names: set[str] = set()
        keyword_owner: dict[str, str] = {}

        for i, entry in enumerate(entries):
            try:
                name, keywords = entry
            except (TypeError, ValueError) as e:
                raise CategoryDictionaryError(
                    f"Entry #{i} must be a (field, keywords) pair, got: {entry!r}"
                ) from e

            if not isinstance(name, str) or not name.strip():
                raise CategoryDictionaryError(f"Entry #{i} has no field name.")
            if name.strip().lower() == OTHER_FIELD:
                raise CategoryDictionaryError(f"Field name '{OTHER_FIELD}' is reserved.")
            if name in seen_names:
                raise CategoryDictionaryError(f"Duplicate field name: '{name}'")
            if isinstance(keywords, (str, bytes)) or not isinstance(keywords, Iterable):
                raise CategoryDictionaryError(f"Field '{name}' needs a list of keywords.")

            folded: list[str] = []
            for kw in keywords:
                if not isinstance(kw, str) or not kw.strip():
                    raise CategoryDictionaryError(f"Field '{name}' has a blank or non-string keyword: {kw!r}")
                kw = kw.lower()
                owner = keyword_owner.get(kw)
                if owner is not None and owner != name:
                    warnings.warn(
                        f"Keyword '{kw}' appears under '{owner}' and '{name}'; '{owner}' always wins.",
                        UserWarning,
                        stacklevel=2,
                    )
                elif owner is None:
                    keyword_owner[kw] = name
                folded.append(kw)

            if not folded:
                raise CategoryDictionaryError(f"Field '{name}' has no keywords.")

            seen_names.add(name)
            rules.append(FieldRule(name=name, keywords=tuple(folded)))

        if not rules:
            raise CategoryDictionaryError("Category dictionary is empty.")

        return cls(rules=tuple(rules))


def _entries_from_document(obj: Any) -> list[tuple[Any, Any]]:
    """
    Accepts either
      - {"law": ["právník", ...], "medicine": [...]}
      - [{"field": "law", "keywords": [...]}, ...]
    """
    if isinstance(obj, dict):
        return list(obj.items())
    if isinstance(obj, list):
        entries = []
        for i, item in enumerate(obj):
            if not isinstance(item, dict) or "field" not in item or "keywords" not in item:
                raise CategoryDictionaryError(
                    f"Entry #{i} must be an object with 'field' and 'keywords', got: {item!r}"
                )
            entries.append((item["field"], item["keywords"]))
        return entries
    raise CategoryDictionaryError(
        f"Category dictionary must be a JSON object or list, got {type(obj).__name__}"
    )


def load_category_dictionary(path: Path) -> CategoryDictionary:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Category dictionary not found: {path}")
    try:
        obj = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CategoryDictionaryError(f"{path} is not valid JSON: {e}") from e
    return CategoryDictionary.from_entries(_entries_from_document(obj))
