"""Offline analysis of outcome draws."""

from surpriselift.analysis.outcomes import format_report, plot_outcome_distribution, sample_outcomes

__all__ = ["format_report", "plot_outcome_distribution", "sample_outcomes"]
