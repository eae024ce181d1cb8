"""Test helpers for Push-up Journey integration tests.

This module re-exports all helpers for convenient imports:

    from tests.helpers import (
        # Builders
        TODAY, make_day, make_progress, make_storage_blob,
        assert_progress_invariants,

        # Setup
        FROZEN_NOW, setup_integration, SetupResult,
    )

See individual modules for full documentation:
- builders.py: Plain dict builders for progress records
- setup.py: Config entry setup with preloaded storage
"""

from tests.helpers.builders import (
    TODAY,
    assert_progress_invariants,
    make_day,
    make_progress,
    make_storage_blob,
)
from tests.helpers.setup import FROZEN_NOW, SetupResult, setup_integration

__all__ = [
    "FROZEN_NOW",
    "TODAY",
    "SetupResult",
    "assert_progress_invariants",
    "make_day",
    "make_progress",
    "make_storage_blob",
    "setup_integration",
]
