from __future__ import annotations

from scripts import predict_mandates


def test_predictions_are_labelled_in_sample():
    assert predict_mandates.PREDICT_CSV.name == "candidates_model.csv"
    assert "insample" in predict_mandates.OUT_PATH.name
