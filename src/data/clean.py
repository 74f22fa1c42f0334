from __future__ import annotations

import re
import unicodedata
from pathlib import Path

import numpy as np
import pandas as pd

from src.config.constants import (
    DEGREE_ORDER,
    DEGREE_TITLES,
    FEMALE_SURNAME_SUFFIXES,
    MANDATE_FALSE,
    MANDATE_TRUE,
    PARTY_COLUMNS,
    RAW_COLUMN_MAP,
    REGIONS,
)
from src.occupation.classify import add_field_column
from src.occupation.dictionary import CategoryDictionary
from src.utils.io import read_csv
from src.utils.validate import require_columns


# Helper functions for data cleaning
def norm_text(x) -> str:
    if pd.isna(x):
        return ""
    s = unicodedata.normalize("NFKC", str(x)).strip()
    s = re.sub(r"\s+", " ", s)
    return s


def normalize_mandate(x) -> int:
    """Mandate marker (A/N, ANO/NE, 1/0, True/False, '*') -> 0/1. Missing counts as 0."""
    if isinstance(x, (bool, np.bool_)):
        return int(x)
    if isinstance(x, (int, np.integer)) and x in (0, 1):
        return int(x)
    if isinstance(x, (float, np.floating)) and not pd.isna(x) and x in (0.0, 1.0):
        return int(x)

    s = norm_text(x).upper()
    if s in MANDATE_TRUE:
        return 1
    if s in MANDATE_FALSE:
        return 0
    raise ValueError(f"Unknown mandate marker: {x!r}")


def map_region(code) -> str:
    try:
        key = int(float(code))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid region code: {code!r}") from e
    if key not in REGIONS:
        raise ValueError(f"Unknown region code: {code!r}")
    return REGIONS[key]


def _title_tokens(*titles) -> list[str]:
    tokens: list[str] = []
    for t in titles:
        s = norm_text(t).lower()
        for tok in re.split(r"[\s,]+", s):
            tok = tok.strip(".")
            if tok:
                tokens.append(tok)
    return tokens


def degree_level(title_before, title_after) -> str:
    """
    Highest academic degree implied by the titles, e.g.
      "Ing." -> master, "Bc." -> bachelor, "doc. MUDr." + "CSc." -> doctorate.
    """
    best = 0
    for tok in _title_tokens(title_before, title_after):
        level = DEGREE_TITLES.get(tok)
        if level is not None:
            best = max(best, DEGREE_ORDER.index(level))
    return DEGREE_ORDER[best]


def infer_gender(last_name) -> str:
    """Czech female surnames end in -á (Nováková, Černá)."""
    s = norm_text(last_name).lower()
    if not s:
        return "unknown"
    return "F" if s.endswith(FEMALE_SURNAME_SUFFIXES) else "M"


# Loading
def load_candidates(path: Path) -> pd.DataFrame:
    raw = read_csv(path)
    raw.columns = [c.strip() for c in raw.columns]
    require_columns(raw, list(RAW_COLUMN_MAP.keys()), name="candidates")
    return raw


def load_parties(path: Path) -> pd.DataFrame:
    parties = read_csv(path)
    parties.columns = [c.strip() for c in parties.columns]
    require_columns(parties, PARTY_COLUMNS, name="parties")

    parties = parties[PARTY_COLUMNS].copy()
    parties["party_id"] = parties["party_id"].astype(str).str.strip()
    if parties["party_id"].duplicated().any():
        dup = parties.loc[parties["party_id"].duplicated(), "party_id"].tolist()
        raise ValueError(f"Duplicate party_id in party reference: {dup[:30]}")
    return parties


# Cleaning
def clean_candidates(raw: pd.DataFrame, parties: pd.DataFrame) -> pd.DataFrame:
    """
    Raw psrk candidate list -> one clean row per candidate with
    region, mandate (0/1), degree, gender, party abbreviation and ideology.
    """
    require_columns(raw, list(RAW_COLUMN_MAP.keys()), name="candidates")
    require_columns(parties, ["party_id", "party_abbrev", "ideology"], name="parties")

    df = raw[list(RAW_COLUMN_MAP.keys())].rename(columns=RAW_COLUMN_MAP).copy()

    for c in ["first_name", "last_name", "title_before", "title_after", "occupation", "residence"]:
        df[c] = df[c].apply(norm_text)
    # empty occupation is a missing value, not a profession
    df["occupation"] = df["occupation"].replace("", np.nan)

    for c in ["party_id", "member_party", "nominating_party"]:
        df[c] = df[c].apply(norm_text)

    df["age"] = pd.to_numeric(df["age"], errors="coerce")
    df["list_position"] = pd.to_numeric(df["list_position"], errors="coerce")
    df["votes"] = pd.to_numeric(df["votes"], errors="coerce").fillna(0).astype(int)
    df["pref_vote_pct"] = pd.to_numeric(df["pref_vote_pct"], errors="coerce").fillna(0.0)

    df["region"] = df["region_code"].apply(map_region)
    df["mandate"] = df["mandate"].apply(normalize_mandate).astype(int)

    df["degree"] = [degree_level(b, a) for b, a in zip(df["title_before"], df["title_after"])]
    df["has_degree"] = (df["degree"] != "none").astype(int)
    df["gender"] = df["last_name"].apply(infer_gender)

    ref = parties[["party_id", "party_abbrev", "ideology"]].copy()
    ref["party_id"] = ref["party_id"].astype(str).str.strip()
    df = df.merge(ref, on="party_id", how="left")

    unmatched = df.loc[df["party_abbrev"].isna(), "party_id"].drop_duplicates().tolist()
    if unmatched:
        print(f"[WARN] Parties without reference entry: {unmatched[:30]}")
    df["party_abbrev"] = df["party_abbrev"].fillna("unknown")
    df["ideology"] = df["ideology"].fillna("unknown")

    return df


def fields_from_occupations(df: pd.DataFrame, dictionary: CategoryDictionary) -> pd.DataFrame:
    """Clean table + `field` column from the occupation text ("other" when nothing matches)."""
    return add_field_column(df, dictionary, text_col="occupation", out_col="field")
