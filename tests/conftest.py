"""
Shared pytest fixtures.

  law_medicine    → two-field dictionary used by the classifier tests
  default_fields  → the shipped config/occupation_fields.json
  raw_candidates  → synthetic candidate list in the raw psrk layout
  parties         → party reference table matching raw_candidates
  clean_table     → raw_candidates after clean_candidates()
  model_table     → clean_table after build_model_table()
  comparison      → compare_models() on model_table (fast config)

Data fixtures are session-scoped; tests copy before modifying them.
"""
from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from src.config.constants import CATEGORICAL_FEATURES, NUMERIC_FEATURES
from src.config.paths import PATHS
from src.data.clean import clean_candidates
from src.features.transforms import build_model_table
from src.models.mandate.train import MandateModelConfig, compare_models
from src.occupation.dictionary import CategoryDictionary, load_category_dictionary


# ── Dictionaries ────────────────────────────────────────────────────────────

@pytest.fixture
def law_medicine() -> CategoryDictionary:
    return CategoryDictionary.from_entries([
        ("law", ["právník", "advokát"]),
        ("medicine", ["lékař"]),
    ])


@pytest.fixture(scope="session")
def default_fields() -> CategoryDictionary:
    return load_category_dictionary(PATHS.occupation_fields)


# ── Candidate data ──────────────────────────────────────────────────────────

_OCCUPATIONS = [
    "advokát",
    "zubní lékař",
    "učitel, starosta",
    "podnikatel",
    "Student",
    None,
    "",
    "řidič",
    "programátor; zastupitel",
    "důchodce",
]
_TITLES = [
    ("", ""),
    ("Ing.", ""),
    ("Mgr.", ""),
    ("MUDr.", "Ph.D."),
    ("Bc.", ""),
    ("doc. Ing.", "CSc."),
]
_SURNAMES = ["Novák", "Nováková", "Černý", "Černá", "Dvořák", "Svobodová"]


def make_raw_candidates(n: int = 200, seed: int = 7) -> pd.DataFrame:
    """
    Candidates of three parties over all 14 regions. List leaders
    (positions 1-2) of parties 1 and 2 win a mandate.
    """
    rng = np.random.default_rng(seed)
    rows = []
    for i in range(n):
        party = i % 3 + 1
        position = (i // 3) % 10 + 1
        before, after = _TITLES[i % len(_TITLES)]
        mandate = "A" if (position <= 2 and party in (1, 2)) else "N"
        rows.append({
            "VOLKRAJ": i % 14 + 1,
            "KSTRANA": party,
            "PORCISLO": position,
            "JMENO": f"Jméno{i}",
            "PRIJMENI": _SURNAMES[i % len(_SURNAMES)],
            "TITULPRED": before,
            "TITULZA": after,
            "VEK": int(rng.integers(21, 76)),
            "POVOLANI": _OCCUPATIONS[i % len(_OCCUPATIONS)],
            "BYDLISTEN": "Praha",
            "PSTRANA": party if i % 4 else 99,
            "NSTRANA": party,
            "POCHLASU": int(rng.integers(50, 5000)),
            "POCPROC": round(float(rng.uniform(0, 10)), 2),
            "MANDAT": mandate,
        })
    return pd.DataFrame(rows)


@pytest.fixture(scope="session")
def raw_candidates() -> pd.DataFrame:
    return make_raw_candidates()


@pytest.fixture(scope="session")
def parties() -> pd.DataFrame:
    return pd.DataFrame({
        "party_id": ["1", "2", "3", "99"],
        "party_abbrev": ["ABC", "DEF", "GHI", "BEZPP"],
        "party_name": ["Strana ABC", "Strana DEF", "Hnutí GHI", "bez politické příslušnosti"],
        "ideology": ["centre-right", "left", "liberal", "none"],
    })


@pytest.fixture(scope="session")
def clean_table(raw_candidates, parties) -> pd.DataFrame:
    return clean_candidates(raw_candidates, parties)


@pytest.fixture(scope="session")
def model_table(clean_table, default_fields) -> pd.DataFrame:
    return build_model_table(clean_table, default_fields)


# ── Fitted models ───────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def fast_cfg() -> MandateModelConfig:
    return MandateModelConfig(cv_splits=3, n_jobs=1)


@pytest.fixture(scope="session")
def comparison(model_table, fast_cfg) -> dict:
    """All three classifiers fitted once and shared across tests."""
    return compare_models(model_table, NUMERIC_FEATURES, CATEGORICAL_FEATURES, fast_cfg)
