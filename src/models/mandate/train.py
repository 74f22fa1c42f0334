from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Literal

import numpy as np
import pandas as pd

from imblearn.over_sampling import SMOTE, RandomOverSampler
from imblearn.pipeline import Pipeline as ImbPipeline
from imblearn.under_sampling import RandomUnderSampler
from sklearn.compose import ColumnTransformer
from sklearn.ensemble import RandomForestClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.metrics import (
    accuracy_score,
    balanced_accuracy_score,
    confusion_matrix,
    f1_score,
    precision_score,
    recall_score,
    roc_auc_score,
)
from sklearn.model_selection import GridSearchCV, StratifiedKFold, train_test_split
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder, StandardScaler
from sklearn.svm import SVC

from src.config.constants import RND, TARGET_COL
from src.utils.validate import require_binary, require_columns


# Preprocessing

def build_preprocessor(numeric_features: list[str], categorical_features: list[str]) -> ColumnTransformer:
    num_pipe = Pipeline([("scaler", StandardScaler())])
    cat_pipe = Pipeline([("ohe", OneHotEncoder(handle_unknown="ignore"))])

    return ColumnTransformer(
        transformers=[
            ("num", num_pipe, numeric_features),
            ("cat", cat_pipe, categorical_features),
        ],
        remainder="drop",
    )


Balancing = Literal["over", "under", "smote", "none"]


def build_sampler(strategy: str, random_state: int = RND):
    """Class balancing step applied to training folds only (None = no balancing)."""
    if strategy == "over":
        return RandomOverSampler(random_state=random_state)
    if strategy == "under":
        return RandomUnderSampler(random_state=random_state)
    if strategy == "smote":
        return SMOTE(random_state=random_state)
    if strategy == "none":
        return None
    raise ValueError(f"Unknown balancing strategy '{strategy}'. Use one of: over, under, smote, none")


# Model candidates

def _make_pipe(pre: ColumnTransformer, sampler, clf) -> ImbPipeline:
    steps = [("pre", pre)]
    if sampler is not None:
        steps.append(("balance", sampler))
    steps.append(("clf", clf))
    return ImbPipeline(steps)


def build_candidates(
    pre: ColumnTransformer,
    sampler=None,
    random_state: int = RND,
) -> dict[str, tuple[ImbPipeline, dict[str, Any]]]:
    candidates: dict[str, tuple[ImbPipeline, dict[str, Any]]] = {}

    # Logistic
    logit = LogisticRegression(
        solver="liblinear",
        max_iter=5000,
        random_state=random_state,
    )
    logit_grid = {"clf__C": np.logspace(-3, 2, 6), "clf__penalty": ["l2"]}
    candidates["logistic"] = (_make_pipe(pre, sampler, logit), logit_grid)

    # Random forest
    rf = RandomForestClassifier(n_estimators=300, random_state=random_state)
    rf_grid = {
        "clf__max_depth": [None, 8],
        "clf__min_samples_leaf": [1, 5],
        "clf__max_features": ["sqrt"],
    }
    candidates["random_forest"] = (_make_pipe(pre, sampler, rf), rf_grid)

    # SVC (probability=True for ROC AUC / predict_proba)
    svc = SVC(probability=True, random_state=random_state)
    svc_grid = {
        "clf__C": [0.1, 1.0, 10.0],
        "clf__kernel": ["rbf", "linear"],
    }
    candidates["svc"] = (_make_pipe(pre, sampler, svc), svc_grid)

    return candidates


# Training

@dataclass(frozen=True)
class MandateModelConfig:
    target: str = TARGET_COL
    test_size: float = 0.25
    cv_splits: int = 5
    balancing: Balancing = "over"
    scoring: str = "roc_auc"
    select_metric: str = "roc_auc"
    n_jobs: int = -1
    random_state: int = RND


def _to_builtin(params: dict[str, Any]) -> dict[str, Any]:
    return {k: (v.item() if isinstance(v, np.generic) else v) for k, v in params.items()}


def prepare_xy(
    df: pd.DataFrame,
    numeric_features: list[str],
    categorical_features: list[str],
    target: str = TARGET_COL,
) -> tuple[pd.DataFrame, np.ndarray]:
    require_columns(df, numeric_features + categorical_features + [target], name="Training data")

    data = df.copy()
    data[target] = pd.to_numeric(data[target], errors="coerce").fillna(0).astype(int)
    require_binary(data, target, name="Training data")

    X = data[numeric_features + categorical_features]
    y = data[target].values
    return X, y


def split_train_test(
    X: pd.DataFrame,
    y: np.ndarray,
    cfg: MandateModelConfig,
) -> tuple[pd.DataFrame, pd.DataFrame, np.ndarray, np.ndarray]:
    """Stratified partition so both sets keep the (rare) mandate share."""
    return train_test_split(
        X,
        y,
        test_size=cfg.test_size,
        stratify=y,
        random_state=cfg.random_state,
    )


def fit_candidate(
    pipe: ImbPipeline,
    grid: dict[str, Any],
    X_tr: pd.DataFrame,
    y_tr: np.ndarray,
    cfg: MandateModelConfig,
) -> tuple[ImbPipeline, dict[str, Any], float]:
    cv = StratifiedKFold(n_splits=cfg.cv_splits, shuffle=True, random_state=cfg.random_state)
    gs = GridSearchCV(
        estimator=pipe,
        param_grid=grid,
        cv=cv,
        scoring=cfg.scoring,
        n_jobs=cfg.n_jobs,
        refit=True,
    )
    gs.fit(X_tr, y_tr)
    return gs.best_estimator_, _to_builtin(gs.best_params_), float(gs.best_score_)


def _safe_auc(y_true: np.ndarray, p: np.ndarray) -> float | None:
    if len(np.unique(y_true)) < 2:
        return None
    return float(roc_auc_score(y_true, p))


def evaluate_classifier(model: Any, X: pd.DataFrame, y: np.ndarray, threshold: float = 0.5) -> dict[str, Any]:
    p = model.predict_proba(X)[:, 1]
    pred = (p >= threshold).astype(int)

    return {
        "accuracy": float(accuracy_score(y, pred)),
        "balanced_accuracy": float(balanced_accuracy_score(y, pred)),
        "precision": float(precision_score(y, pred, zero_division=0)),
        "recall": float(recall_score(y, pred, zero_division=0)),
        "f1": float(f1_score(y, pred, zero_division=0)),
        "roc_auc": _safe_auc(y, p),
        "confusion_matrix": confusion_matrix(y, pred, labels=[0, 1]).tolist(),
        "n": int(len(y)),
        "positives": int(np.sum(y)),
    }


def select_winner(metrics_by_model: dict[str, dict[str, Any]], metric: str) -> str:
    scored = {m: v.get(metric) for m, v in metrics_by_model.items()}
    scored = {m: s for m, s in scored.items() if s is not None}
    if not scored:
        raise ValueError(f"No model has a value for metric '{metric}'")
    return max(scored, key=lambda k: scored[k])


def compare_models(
    df: pd.DataFrame,
    numeric_features: list[str],
    categorical_features: list[str],
    cfg: MandateModelConfig,
    model_names: list[str] | None = None,
    verbose: bool = False,
) -> dict[str, Any]:
    """
    Stratified train/test split, GridSearchCV (StratifiedKFold) per model on the
    train part with class balancing inside the pipeline, evaluation on the test part.

    Returns a dict with:
      - config
      - metrics_by_model (test-set metrics)
      - cv_score_by_model (best mean CV score, cfg.scoring)
      - best_params_by_model
      - winner (by cfg.select_metric)
      - models (fitted estimators), X_test, y_test
    """
    X, y = prepare_xy(df, numeric_features, categorical_features, target=cfg.target)
    X_tr, X_te, y_tr, y_te = split_train_test(X, y, cfg)

    pre = build_preprocessor(numeric_features, categorical_features)
    sampler = build_sampler(cfg.balancing, random_state=cfg.random_state)
    candidates = build_candidates(pre=pre, sampler=sampler, random_state=cfg.random_state)

    names = model_names or list(candidates.keys())
    unknown = [n for n in names if n not in candidates]
    if unknown:
        raise ValueError(f"Unknown model(s) {unknown}. Available: {sorted(candidates.keys())}")

    models: dict[str, ImbPipeline] = {}
    metrics_by_model: dict[str, dict[str, Any]] = {}
    cv_score_by_model: dict[str, float] = {}
    best_params_by_model: dict[str, dict[str, Any]] = {}

    for name in names:
        pipe, grid = candidates[name]
        est, best_params, cv_score = fit_candidate(pipe, grid, X_tr, y_tr, cfg)

        models[name] = est
        best_params_by_model[name] = best_params
        cv_score_by_model[name] = cv_score
        metrics_by_model[name] = evaluate_classifier(est, X_te, y_te)

        if verbose:
            print(f"[{name}] cv_{cfg.scoring}={cv_score:.3f} test_{cfg.select_metric}={metrics_by_model[name].get(cfg.select_metric)}")

    return {
        "config": asdict(cfg),
        "features": {"numeric": numeric_features, "categorical": categorical_features},
        "metrics_by_model": metrics_by_model,
        "cv_score_by_model": cv_score_by_model,
        "best_params_by_model": best_params_by_model,
        "winner": select_winner(metrics_by_model, cfg.select_metric),
        "models": models,
        "X_test": X_te,
        "y_test": y_te,
    }


def feature_importance(model: ImbPipeline) -> pd.DataFrame:
    """
    Named feature importances for a fitted pipeline:
    impurity importances for tree ensembles, |coef| for linear models.
    """
    pre = model.named_steps["pre"]
    clf = model.named_steps["clf"]
    names = list(pre.get_feature_names_out())

    if hasattr(clf, "feature_importances_"):
        values = np.asarray(clf.feature_importances_)
    elif hasattr(clf, "coef_"):
        coef = clf.coef_
        if hasattr(coef, "toarray"):
            coef = coef.toarray()
        values = np.abs(np.asarray(coef)).ravel()
    else:
        raise ValueError(f"{type(clf).__name__} exposes no feature importances or coefficients")

    return (
        pd.DataFrame({"feature": names, "importance": values})
          .sort_values("importance", ascending=False)
          .reset_index(drop=True)
    )


def build_artifact_name(prefix: str, model_name: str) -> str:
    return f"{prefix}_{model_name}"


def save_comparison(
    result: dict[str, Any],
    artifacts_dir: Path,
    metrics_path: Path | None = None,
    artifact_prefix: str = "mandate",
) -> dict[str, Any]:
    """
    Saves:
      - models/artifacts/<prefix>_<model>.joblib
      - models/artifacts/<prefix>_manifest.json  (what was trained, where)
      - metrics JSON (test metrics, CV scores, best params, winner)
    """
    import joblib

    artifacts_dir.mkdir(parents=True, exist_ok=True)

    model_paths: dict[str, str] = {}
    for name, est in result["models"].items():
        path = artifacts_dir / f"{build_artifact_name(artifact_prefix, name)}.joblib"
        joblib.dump(est, path)
        model_paths[name] = str(path)

    manifest = {
        "artifact_prefix": artifact_prefix,
        "target": result["config"]["target"],
        "features": result["features"],
        "winner": result["winner"],
        "model_paths": model_paths,
    }
    manifest_path = artifacts_dir / f"{artifact_prefix}_manifest.json"
    manifest_path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")

    metrics = {k: result[k] for k in (
        "config", "metrics_by_model", "cv_score_by_model", "best_params_by_model", "winner",
    )}
    metrics_path = metrics_path or artifacts_dir / f"{artifact_prefix}_metrics.json"
    metrics_path.parent.mkdir(parents=True, exist_ok=True)
    metrics_path.write_text(json.dumps(metrics, indent=2), encoding="utf-8")

    return {
        "winner": result["winner"],
        "model_paths": model_paths,
        "manifest_path": str(manifest_path),
        "metrics_path": str(metrics_path),
    }
