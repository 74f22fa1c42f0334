from __future__ import annotations

from src.config.paths import PATHS
from src.utils.io import read_csv
from src.viz.plots import (
    plot_age_distribution,
    plot_field_counts,
    plot_gender_by_ideology,
    plot_mandate_rate_by,
    save_figure,
)

MODEL_IN = PATHS.processed / "candidates_model.csv"
FIG_DIR = PATHS.figures


def main() -> None:
    df = read_csv(MODEL_IN)

    figures = {
        "field_counts.png": plot_field_counts(df),
        "mandate_rate_by_field.png": plot_mandate_rate_by(df, "field", min_count=10),
        "mandate_rate_by_degree.png": plot_mandate_rate_by(df, "degree"),
        "mandate_rate_by_gender.png": plot_mandate_rate_by(df, "gender"),
        "mandate_rate_by_ideology.png": plot_mandate_rate_by(df, "ideology"),
        "mandate_rate_by_region.png": plot_mandate_rate_by(df, "region"),
        "mandate_rate_by_age_group.png": plot_mandate_rate_by(df, "age_group"),
        "age_distribution.png": plot_age_distribution(df),
        "gender_by_ideology.png": plot_gender_by_ideology(df),
    }

    for name, fig in figures.items():
        path = save_figure(fig, FIG_DIR / name)
        print(f"[OK] Saved: {path}")


if __name__ == "__main__":
    main()
