from __future__ import annotations

from pathlib import Path
from typing import Any

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.figure import Figure
from sklearn.metrics import RocCurveDisplay

from src.config.constants import TARGET_COL
from src.utils.validate import require_columns

sns.set_theme(style="whitegrid")


def save_figure(fig: Figure, path: Path, dpi: int = 150) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return path


# EDA

def plot_field_counts(df: pd.DataFrame, col: str = "field") -> Figure:
    require_columns(df, [col], name="plot_field_counts")
    counts = df[col].value_counts()

    fig, ax = plt.subplots(figsize=(8, 5))
    sns.barplot(x=counts.values, y=counts.index.astype(str), ax=ax, color="steelblue")
    ax.set_xlabel("Candidates")
    ax.set_ylabel(col)
    ax.set_title(f"Candidates by {col}")
    fig.tight_layout()
    return fig


def plot_mandate_rate_by(df: pd.DataFrame, col: str, target: str = TARGET_COL, min_count: int = 1) -> Figure:
    """Share of candidates with a mandate within each level of `col`."""
    require_columns(df, [col, target], name="plot_mandate_rate_by")

    rates = df.groupby(col)[target].agg(["mean", "count"])
    rates = rates[rates["count"] >= min_count].sort_values("mean", ascending=False).reset_index()
    rates[col] = rates[col].astype(str)

    fig, ax = plt.subplots(figsize=(8, 5))
    sns.barplot(data=rates, x="mean", y=col, ax=ax, color="indianred")
    ax.set_xlabel("Mandate rate")
    ax.set_title(f"Mandate rate by {col}")
    fig.tight_layout()
    return fig


def plot_age_distribution(df: pd.DataFrame, target: str = TARGET_COL) -> Figure:
    require_columns(df, ["age", target], name="plot_age_distribution")

    fig, ax = plt.subplots(figsize=(8, 5))
    sns.histplot(data=df, x="age", hue=target, stat="density", common_norm=False, bins=30, kde=True, ax=ax)
    ax.set_title("Age distribution by mandate")
    fig.tight_layout()
    return fig


def plot_gender_by_ideology(df: pd.DataFrame) -> Figure:
    require_columns(df, ["gender", "ideology"], name="plot_gender_by_ideology")
    share = pd.crosstab(df["ideology"], df["gender"], normalize="index")

    fig, ax = plt.subplots(figsize=(8, 5))
    share.plot(kind="barh", stacked=True, ax=ax)
    ax.set_xlabel("Share of candidates")
    ax.set_title("Gender composition by ideology")
    fig.tight_layout()
    return fig


# Model comparison

def plot_model_comparison(metrics_by_model: dict[str, dict[str, Any]], metrics: list[str] | None = None) -> Figure:
    metrics = metrics or ["accuracy", "balanced_accuracy", "precision", "recall", "f1", "roc_auc"]
    rows = []
    for name, m in metrics_by_model.items():
        for k in metrics:
            v = m.get(k)
            if v is not None:
                rows.append({"model": name, "metric": k, "value": float(v)})
    long = pd.DataFrame(rows, columns=["model", "metric", "value"])

    fig, ax = plt.subplots(figsize=(9, 5))
    sns.barplot(data=long, x="metric", y="value", hue="model", ax=ax)
    ax.set_ylim(0, 1)
    ax.set_title("Test-set metrics by model")
    fig.tight_layout()
    return fig


def plot_confusion_matrices(metrics_by_model: dict[str, dict[str, Any]]) -> Figure:
    names = list(metrics_by_model.keys())
    fig, axes = plt.subplots(1, max(len(names), 1), figsize=(4 * max(len(names), 1), 4), squeeze=False)

    for ax, name in zip(axes[0], names):
        cm = np.asarray(metrics_by_model[name]["confusion_matrix"])
        sns.heatmap(cm, annot=True, fmt="d", cmap="Blues", cbar=False, ax=ax,
                    xticklabels=["no mandate", "mandate"], yticklabels=["no mandate", "mandate"])
        ax.set_title(name)
        ax.set_xlabel("Predicted")
        ax.set_ylabel("Actual")

    fig.tight_layout()
    return fig


def plot_roc_curves(models: dict[str, Any], X: pd.DataFrame, y: np.ndarray) -> Figure:
    fig, ax = plt.subplots(figsize=(6, 6))
    for name, model in models.items():
        RocCurveDisplay.from_estimator(model, X, y, name=name, ax=ax)
    ax.plot([0, 1], [0, 1], linestyle="--", color="grey")
    ax.set_title("ROC curves (test set)")
    fig.tight_layout()
    return fig
