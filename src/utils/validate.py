from __future__ import annotations
import pandas as pd

def require_columns(df: pd.DataFrame, cols: list[str], name: str = "df") -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"{name} missing columns: {missing}")

def require_no_nulls(df: pd.DataFrame, cols: list[str], name: str = "df") -> None:
    bad = [c for c in cols if df[c].isna().any()]
    if bad:
        raise ValueError(f"{name} has nulls in columns: {bad}")

def require_binary(df: pd.DataFrame, col: str, name: str = "df") -> None:
    values = set(pd.unique(df[col].dropna()))
    if not values <= {0, 1}:
        raise ValueError(f"{name}.{col} must be 0/1, found: {sorted(map(str, values))}")
    if len(values) < 2:
        raise ValueError(f"{name}.{col} has a single class only: {sorted(map(str, values))}")
