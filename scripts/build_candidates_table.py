from __future__ import annotations

from src.config.paths import PATHS
from src.data.clean import clean_candidates, load_candidates, load_parties
from src.features.transforms import build_model_table
from src.occupation.dictionary import load_category_dictionary
from src.utils.io import write_csv

# Paths (inputs)
CANDIDATES_IN = PATHS.raw / "candidates.csv"
PARTIES_IN = PATHS.reference / "parties.csv"
FIELDS_IN = PATHS.occupation_fields

# Paths (outputs)
CLEAN_OUT = PATHS.processed / "candidates_clean.csv"
MODEL_OUT = PATHS.processed / "candidates_model.csv"


def main() -> None:
    # Fail fast on a bad dictionary before touching the data
    fields = load_category_dictionary(FIELDS_IN)
    print(f"[OK] Occupation fields: {len(fields)} ({', '.join(fields.names)})")

    raw = load_candidates(CANDIDATES_IN)
    parties = load_parties(PARTIES_IN)

    clean = clean_candidates(raw, parties)
    model = build_model_table(clean, fields)

    write_csv(clean, CLEAN_OUT)
    write_csv(model, MODEL_OUT)

    print(f"[OK] Wrote: {CLEAN_OUT}  rows={len(clean):,}")
    print(f"[OK] Wrote: {MODEL_OUT}  rows={len(model):,}  mandates={int(model['mandate'].sum()):,}")
    print("Field counts:")
    for k, v in model["field"].value_counts().items():
        print(f"  - {k}: {v}")


if __name__ == "__main__":
    main()
