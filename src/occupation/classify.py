from __future__ import annotations

import re
from typing import Any

import pandas as pd

from src.config.constants import OTHER_FIELD, PROFESSION_SEPARATORS
from src.occupation.dictionary import CategoryDictionary

_SPLIT_RE = re.compile("|".join(re.escape(s) for s in PROFESSION_SEPARATORS))


def _is_missing(x: Any) -> bool:
    if x is None:
        return True
    if isinstance(x, (list, tuple)):
        return False
    try:
        return bool(pd.isna(x))
    except (TypeError, ValueError):
        return False


def classify(text: Any, dictionary: CategoryDictionary) -> str:
    """
    First field whose keyword is a substring of the lower-cased text, else "other".
    Missing values (None / NaN / NA) map to "other".
    """
    if _is_missing(text):
        return OTHER_FIELD

    folded = str(text).lower()
    for rule in dictionary.rules:
        for kw in rule.keywords:
            if kw in folded:
                return rule.name
    return OTHER_FIELD


def split_professions(value: Any) -> list[str]:
    """Flatten a record's occupation value into a list of profession strings, in order."""
    if _is_missing(value):
        return []
    if isinstance(value, (list, tuple)):
        out: list[str] = []
        for v in value:
            out.extend(split_professions(v))
        return out
    return [p for p in _SPLIT_RE.split(str(value)) if p.strip()]


def classify_record(value: Any, dictionary: CategoryDictionary) -> str:
    # first listed profession with a known field wins
    for part in split_professions(value):
        label = classify(part, dictionary)
        if label != OTHER_FIELD:
            return label
    return OTHER_FIELD


def add_field_column(
    df: pd.DataFrame,
    dictionary: CategoryDictionary,
    text_col: str = "occupation",
    out_col: str = "field",
) -> pd.DataFrame:
    if text_col not in df.columns:
        raise ValueError(f"Missing occupation column: '{text_col}'")

    out = df.copy()
    out[out_col] = [classify_record(v, dictionary) for v in out[text_col].tolist()]
    return out
