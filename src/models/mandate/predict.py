from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from src.utils.validate import require_columns


@dataclass(frozen=True)
class PredictConfig:
    artifacts_dir: Path
    artifact_prefix: str = "mandate"
    threshold: float = 0.5


def load_manifest(cfg: PredictConfig) -> dict[str, Any]:
    path = cfg.artifacts_dir / f"{cfg.artifact_prefix}_manifest.json"
    if not path.exists():
        raise FileNotFoundError(
            f"Missing manifest: {path}. Run the training script first."
        )
    return json.loads(path.read_text(encoding="utf-8"))


def load_models_from_manifest(cfg: PredictConfig, only_winner: bool = False) -> dict[str, Any]:
    import joblib

    manifest = load_manifest(cfg)
    model_paths = manifest.get("model_paths", {})
    if not isinstance(model_paths, dict) or not model_paths:
        raise ValueError("Manifest has no model_paths. Re-train the models.")

    if only_winner:
        winner = manifest.get("winner")
        if winner not in model_paths:
            raise ValueError(f"Manifest winner '{winner}' has no saved model.")
        model_paths = {winner: model_paths[winner]}

    models: dict[str, Any] = {}
    for model_name, model_path in model_paths.items():
        models[model_name] = joblib.load(model_path)
    return models


def predict_mandates(
    df_pred: pd.DataFrame,
    numeric_features: list[str],
    categorical_features: list[str],
    models: dict[str, Any],
    threshold: float = 0.5,
    keep_cols: list[str] | None = None,
) -> pd.DataFrame:
    """
    Candidate-level output with p_mandate_<model> and pred_mandate_<model>
    for every model, rows in input order.
    """
    require_columns(df_pred, numeric_features + categorical_features, name="Prediction data")

    keep = [c for c in (keep_cols or []) if c in df_pred.columns]
    out = df_pred[keep].copy()
    Xp = df_pred[numeric_features + categorical_features]

    for name, model in models.items():
        p = model.predict_proba(Xp)[:, 1]
        out[f"p_mandate_{name}"] = p
        out[f"pred_mandate_{name}"] = (p >= threshold).astype(int)

    return out
