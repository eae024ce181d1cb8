"""Engine modules for Push-up Journey integration.

Contains pure computation engines:
- progress_engine: Workout day, streak and joker transitions
- gamification_engine: Level derivation and achievement evaluation
"""

# Use relative imports within package to avoid mypy module resolution issues
from .gamification_engine import GamificationEngine
from .progress_engine import ProgressEngine, ProgressTransition

__all__ = [
    "GamificationEngine",
    "ProgressEngine",
    "ProgressTransition",
]
