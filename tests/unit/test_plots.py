from __future__ import annotations

import pytest
from matplotlib.figure import Figure

from src.viz.plots import (
    plot_age_distribution,
    plot_confusion_matrices,
    plot_field_counts,
    plot_gender_by_ideology,
    plot_mandate_rate_by,
    plot_model_comparison,
    plot_roc_curves,
    save_figure,
)

_METRICS = {
    "logistic": {"accuracy": 0.9, "balanced_accuracy": 0.8, "precision": 0.5, "recall": 0.7,
                 "f1": 0.6, "roc_auc": 0.85, "confusion_matrix": [[40, 3], [2, 5]]},
    "svc": {"accuracy": 0.88, "balanced_accuracy": 0.75, "precision": 0.4, "recall": 0.6,
            "f1": 0.5, "roc_auc": None, "confusion_matrix": [[39, 4], [3, 4]]},
}


class TestEdaFigures:
    def test_field_counts(self, model_table):
        assert isinstance(plot_field_counts(model_table), Figure)

    @pytest.mark.parametrize("col", ["field", "degree", "gender", "ideology", "age_group"])
    def test_mandate_rate_by(self, model_table, col):
        fig = plot_mandate_rate_by(model_table, col)
        assert isinstance(fig, Figure)

    def test_age_distribution(self, model_table):
        assert isinstance(plot_age_distribution(model_table), Figure)

    def test_gender_by_ideology(self, model_table):
        assert isinstance(plot_gender_by_ideology(model_table), Figure)

    def test_missing_column_raises(self, model_table):
        with pytest.raises(ValueError):
            plot_mandate_rate_by(model_table, "not_a_column")


class TestModelFigures:
    def test_model_comparison_skips_missing_metric(self):
        assert isinstance(plot_model_comparison(_METRICS), Figure)

    def test_confusion_matrices(self):
        fig = plot_confusion_matrices(_METRICS)
        assert len(fig.axes) == 2

    def test_roc_curves(self, comparison):
        fig = plot_roc_curves(comparison["models"], comparison["X_test"], comparison["y_test"])
        assert isinstance(fig, Figure)
        labels = [t.get_text() for t in fig.axes[0].get_legend().get_texts()]
        assert all(any(name in lab for lab in labels) for name in comparison["models"])


def test_save_figure_creates_dirs(tmp_path, model_table):
    path = save_figure(plot_field_counts(model_table), tmp_path / "figs" / "fields.png")
    assert path.exists()
    assert path.stat().st_size > 0
