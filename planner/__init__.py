"""Fusion swap planner - plans swaps against concentrated-liquidity pools."""

__version__ = "0.1.0"

from planner.config import PlannerConfig  # noqa: E402
from planner.models import SwapIntent, SwapMode, SwapPlan  # noqa: E402
from planner.swap import SwapPlanner  # noqa: E402

__all__ = ["SwapPlanner", "PlannerConfig", "SwapIntent", "SwapMode", "SwapPlan", "__version__"]
