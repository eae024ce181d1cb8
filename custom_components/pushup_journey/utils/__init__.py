# File: utils/__init__.py
"""Pure Python utilities for Push-up Journey.

This module contains pure Python functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

Submodules:
    - dt_utils: Date parsing, day arithmetic, reminder time parsing
    - math_utils: Percentage and clamping helpers
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
