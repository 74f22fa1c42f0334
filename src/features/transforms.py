from __future__ import annotations
import numpy as np
import pandas as pd

from src.config.constants import AGE_BINS, AGE_LABELS, CATEGORICAL_FEATURES, NUMERIC_FEATURES, TARGET_COL
from src.data.clean import fields_from_occupations
from src.occupation.dictionary import CategoryDictionary
from src.utils.validate import require_columns, require_no_nulls

def add_derived_features(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()

    # Age buckets
    df["age_group"] = pd.cut(df["age"], bins=AGE_BINS, labels=AGE_LABELS).astype(str)
    df.loc[df["age"].isna(), "age_group"] = "unknown"

    # Ballot position (1 = list leader)
    df["is_list_leader"] = (df["list_position"] == 1).astype(int)
    df["list_position_log"] = np.log1p(df["list_position"].clip(lower=1))

    # Party members vs. nominated non-members
    df["is_party_member"] = (df["member_party"].astype(str) == df["nominating_party"].astype(str)).astype(int)

    return df


def build_model_table(clean: pd.DataFrame, dictionary: CategoryDictionary) -> pd.DataFrame:
    """
    Clean candidate table -> model table (field + derived features).
    Missing ages are filled with the median so every row stays usable.
    """
    require_columns(
        clean,
        ["age", "list_position", "member_party", "nominating_party", "occupation", TARGET_COL],
        name="clean_candidates",
    )

    df = fields_from_occupations(clean, dictionary)
    df = add_derived_features(df)

    df["age"] = df["age"].fillna(df["age"].median(skipna=True))
    df["list_position_log"] = df["list_position_log"].fillna(df["list_position_log"].median(skipna=True))

    require_columns(df, NUMERIC_FEATURES + CATEGORICAL_FEATURES, name="model_table")
    require_no_nulls(df, [TARGET_COL], name="model_table")
    return df
