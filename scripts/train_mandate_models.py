from __future__ import annotations

import pandas as pd

from src.config.constants import CATEGORICAL_FEATURES, NUMERIC_FEATURES
from src.config.paths import PATHS
from src.models.mandate.train import (
    MandateModelConfig,
    compare_models,
    feature_importance,
    save_comparison,
)
from src.utils.io import read_csv, write_csv
from src.viz.plots import (
    plot_confusion_matrices,
    plot_model_comparison,
    plot_roc_curves,
    save_figure,
)

MODEL_IN = PATHS.processed / "candidates_model.csv"
METRICS_OUT = PATHS.outputs / "mandate_model_metrics.json"
IMPORTANCE_OUT = PATHS.outputs / "mandate_feature_importance.csv"


def main() -> None:
    df = read_csv(MODEL_IN)

    cfg = MandateModelConfig(balancing="over", cv_splits=5)

    result = compare_models(
        df=df,
        numeric_features=NUMERIC_FEATURES,
        categorical_features=CATEGORICAL_FEATURES,
        cfg=cfg,
        verbose=True,
    )

    saved = save_comparison(result, artifacts_dir=PATHS.artifacts, metrics_path=METRICS_OUT)

    # Figures
    save_figure(plot_model_comparison(result["metrics_by_model"]), PATHS.figures / "model_comparison.png")
    save_figure(plot_confusion_matrices(result["metrics_by_model"]), PATHS.figures / "confusion_matrices.png")
    save_figure(
        plot_roc_curves(result["models"], result["X_test"], result["y_test"]),
        PATHS.figures / "roc_curves.png",
    )

    # Importances for models that expose them
    importances = []
    for name, model in result["models"].items():
        try:
            imp = feature_importance(model)
        except ValueError as e:
            print(f"[WARN] {name}: {e}")
            continue
        imp.insert(0, "model", name)
        importances.append(imp)
    if importances:
        write_csv(pd.concat(importances, ignore_index=True), IMPORTANCE_OUT)

    print("[OK] Mandate models trained.")
    print(f"Winner ({cfg.select_metric}): {saved['winner']}")
    for name, m in result["metrics_by_model"].items():
        print(f"  - {name}: roc_auc={m['roc_auc']} f1={m['f1']:.3f} balanced_acc={m['balanced_accuracy']:.3f}")
    print("Manifest:", saved["manifest_path"])
    print("Metrics:", saved["metrics_path"])


if __name__ == "__main__":
    main()
