"""Monte Carlo check of the outcome selector against its weight table.

Draws many outcomes, tabulates them next to the configured shares, and
optionally charts expected vs observed frequencies.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path

import pandas as pd

from surpriselift.game.probability import ProbabilityConfig
from surpriselift.game.selector import OutcomeSelector
from surpriselift.game.types import PRIORITY_ORDER

logger = logging.getLogger(__name__)

COLUMNS = ["floor_type", "weight", "count", "expected_pct", "observed_pct", "deviation_pct"]


def sample_outcomes(
    probabilities: ProbabilityConfig | None = None,
    draws: int = 10_000,
    seed: int | None = None,
) -> pd.DataFrame:
    """Draw ``draws`` outcomes and compare them with the weight table.

    Returns one row per floor type in draw priority order. Percentages are
    unrounded floats.

    Raises:
        ValueError: If ``draws`` is not positive.
        DegenerateWeightsError: If every weight is zero.
    """
    if draws <= 0:
        raise ValueError(f"draws must be positive, got {draws}")
    probabilities = probabilities if probabilities is not None else ProbabilityConfig()
    selector = OutcomeSelector(random.Random(seed))
    weights = probabilities.snapshot()

    results = pd.Series([selector.draw(weights).value for _ in range(draws)])
    counts = results.value_counts()

    total = probabilities.total
    frame = pd.DataFrame(
        {
            "floor_type": [t.value for t in PRIORITY_ORDER],
            "weight": [weights[t] for t in PRIORITY_ORDER],
            "count": [int(counts.get(t.value, 0)) for t in PRIORITY_ORDER],
        }
    )
    frame["expected_pct"] = frame["weight"] / total * 100
    frame["observed_pct"] = frame["count"] / draws * 100
    frame["deviation_pct"] = frame["observed_pct"] - frame["expected_pct"]
    logger.info(
        "Sampled %d outcomes; max deviation %.2f%%", draws, frame["deviation_pct"].abs().max()
    )
    return frame[COLUMNS]


def format_report(frame: pd.DataFrame) -> str:
    """Render a sample table as aligned text."""
    return frame.to_string(
        index=False,
        float_format=lambda value: f"{value:.2f}",
    )


def plot_outcome_distribution(frame: pd.DataFrame, path: str | Path) -> Path:
    """Save a grouped bar chart of expected vs observed percentages."""
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    positions = range(len(frame))
    width = 0.4

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bar([p - width / 2 for p in positions], frame["expected_pct"], width, label="expected")
    ax.bar([p + width / 2 for p in positions], frame["observed_pct"], width, label="observed")
    ax.set_xticks(list(positions))
    ax.set_xticklabels(frame["floor_type"])
    ax.set_ylabel("share of arrivals (%)")
    ax.set_title(f"Outcome distribution over {int(frame['count'].sum())} draws")
    ax.legend()
    ax.grid(True, axis="y", alpha=0.3)

    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    logger.info("Saved outcome chart to %s", path)
    return path
