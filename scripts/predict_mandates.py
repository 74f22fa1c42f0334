from __future__ import annotations

from src.config.constants import CATEGORICAL_FEATURES, ID_COLS, NUMERIC_FEATURES
from src.config.paths import PATHS
from src.models.mandate.predict import (
    PredictConfig,
    load_models_from_manifest,
    predict_mandates,
)
from src.utils.io import read_csv, write_csv

# Scores the table the models were trained on, so the output is in-sample.
PREDICT_CSV = PATHS.processed / "candidates_model.csv"
OUT_PATH = PATHS.outputs / "mandate_insample_predictions.csv"


def main() -> None:
    df_pred = read_csv(PREDICT_CSV)

    cfg = PredictConfig(artifacts_dir=PATHS.artifacts, artifact_prefix="mandate")
    models = load_models_from_manifest(cfg)

    out = predict_mandates(
        df_pred=df_pred,
        numeric_features=NUMERIC_FEATURES,
        categorical_features=CATEGORICAL_FEATURES,
        models=models,
        threshold=cfg.threshold,
        keep_cols=ID_COLS + ["first_name", "last_name", "field", "mandate"],
    )
    write_csv(out, OUT_PATH)

    print("[OK] Prediction complete (in-sample scores on the training table).")
    print("Saved:", OUT_PATH)
    print("Models used:", list(models.keys()))


if __name__ == "__main__":
    main()
