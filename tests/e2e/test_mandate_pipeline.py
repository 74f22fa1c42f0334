"""
tests/e2e/test_mandate_pipeline.py
──────────────────────────────────────────────────────────────────────────────
CSV files in → clean table → model table → fitted models persisted →
models reloaded from the manifest → predictions.
"""
from __future__ import annotations

import json

import pytest

from src.config.constants import CATEGORICAL_FEATURES, NUMERIC_FEATURES
from src.data.clean import clean_candidates, load_candidates, load_parties
from src.features.transforms import build_model_table
from src.models.mandate.predict import (
    PredictConfig,
    load_manifest,
    load_models_from_manifest,
    predict_mandates,
)
from src.models.mandate.train import save_comparison
from src.utils.io import read_csv, write_csv


def test_csv_to_model_table(tmp_path, raw_candidates, parties, default_fields):
    write_csv(raw_candidates, tmp_path / "raw" / "candidates.csv")
    write_csv(parties, tmp_path / "reference" / "parties.csv")

    clean = clean_candidates(
        load_candidates(tmp_path / "raw" / "candidates.csv"),
        load_parties(tmp_path / "reference" / "parties.csv"),
    )
    table = build_model_table(clean, default_fields)
    out = write_csv(table, tmp_path / "processed" / "candidates_model.csv")

    reread = read_csv(out)
    assert len(reread) == len(raw_candidates)
    assert set(reread["field"]) <= set(default_fields.names) | {"other"}
    assert reread["mandate"].sum() == (raw_candidates["MANDAT"] == "A").sum()


class TestPersistAndPredict:
    @pytest.fixture
    def saved(self, tmp_path, comparison):
        return save_comparison(comparison, artifacts_dir=tmp_path / "artifacts")

    def test_manifest(self, tmp_path, saved, comparison):
        manifest = load_manifest(PredictConfig(artifacts_dir=tmp_path / "artifacts"))
        assert manifest["winner"] == comparison["winner"]
        assert set(manifest["model_paths"]) == {"logistic", "random_forest", "svc"}
        assert manifest["features"]["numeric"] == NUMERIC_FEATURES

        metrics = json.loads(open(saved["metrics_path"], encoding="utf-8").read())
        assert metrics["winner"] == comparison["winner"]
        assert "models" not in metrics

    def test_predict_all_models(self, tmp_path, saved, model_table):
        models = load_models_from_manifest(PredictConfig(artifacts_dir=tmp_path / "artifacts"))
        out = predict_mandates(
            model_table, NUMERIC_FEATURES, CATEGORICAL_FEATURES, models,
            keep_cols=["party_id", "list_position", "mandate", "not_there"],
        )
        assert len(out) == len(model_table)
        assert list(out.columns[:3]) == ["party_id", "list_position", "mandate"]
        for name in models:
            assert out[f"p_mandate_{name}"].between(0, 1).all()
            assert set(out[f"pred_mandate_{name}"].unique()) <= {0, 1}

    def test_only_winner(self, tmp_path, saved, comparison):
        models = load_models_from_manifest(
            PredictConfig(artifacts_dir=tmp_path / "artifacts"), only_winner=True
        )
        assert list(models) == [comparison["winner"]]

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="manifest"):
            load_manifest(PredictConfig(artifacts_dir=tmp_path / "nothing"))

    def test_prediction_requires_features(self, tmp_path, saved, model_table):
        models = load_models_from_manifest(PredictConfig(artifacts_dir=tmp_path / "artifacts"))
        with pytest.raises(ValueError, match="Prediction data"):
            predict_mandates(model_table.drop(columns=["age"]), NUMERIC_FEATURES, CATEGORICAL_FEATURES, models)


def test_default_dictionary_covers_most_synthetic_occupations(model_table):
    share_other = (model_table["field"] == "other").mean()
    assert share_other < 0.3
