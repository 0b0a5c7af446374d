"""Starting-lineup selection and bench bookkeeping."""

from .service import (
    LineupAnalysis,
    LineupReport,
    OptimalLineup,
    analyze_lineup,
    build_lineup_report,
    calculate_optimal_lineup,
    calculate_total_projected_points,
    get_bench_players,
)

__all__ = [
    "LineupAnalysis",
    "LineupReport",
    "OptimalLineup",
    "analyze_lineup",
    "build_lineup_report",
    "calculate_optimal_lineup",
    "calculate_total_projected_points",
    "get_bench_players",
]
