"""Backup and export utilities for Push-up Journey.

Handles progress export/import (JSON), export file writing and timestamped
copies of the storage file taken before destructive operations.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
import shutil
from typing import TYPE_CHECKING, Any

from homeassistant.util import dt as dt_util

from .. import const
from ..utils.dt_utils import dt_to_iso_date

if TYPE_CHECKING:
    from datetime import date

    from homeassistant.core import HomeAssistant

    from ..store import PushupJourneyStore
    from ..type_defs import UserProgressData


class InvalidProgressDataError(ValueError):
    """Raised when an imported progress payload is rejected."""


def _write_text_file(path: str, content: str) -> None:
    """Write UTF-8 text content to disk, creating parent directories.

    This helper is used with hass.async_add_executor_job in async contexts.
    """
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    Path(path).write_text(content, encoding="utf-8")


# ==============================================================================
# Export / Import
# ==============================================================================


def export_progress_json(progress: UserProgressData) -> str:
    """Serialize progress as pretty-printed JSON."""
    return json.dumps(progress, indent=2, ensure_ascii=False)


def validate_progress_data(data: Any) -> UserProgressData:
    """Check the minimum structure of a progress payload.

    Only the top level is checked: currentDay must be truthy and days must
    be a list. Missing streak, level and levelProgress take their first-run
    values. Deeper structure is trusted.

    Raises:
        InvalidProgressDataError: If the payload is rejected.
    """
    if not isinstance(data, dict):
        raise InvalidProgressDataError("Progress data must be a JSON object")
    if not data.get(const.DATA_CURRENT_DAY):
        raise InvalidProgressDataError("Missing or empty 'currentDay'")
    if not isinstance(data.get(const.DATA_DAYS), list):
        raise InvalidProgressDataError("'days' must be a list")

    data.setdefault(const.DATA_STREAK, const.DEFAULT_ZERO)
    data.setdefault(const.DATA_LEVEL, const.DEFAULT_STARTING_LEVEL)
    data.setdefault(const.DATA_LEVEL_PROGRESS, const.DEFAULT_ZERO)
    return data  # type: ignore[return-value]


def parse_progress_json(json_str: str) -> UserProgressData:
    """Parse and validate exported progress JSON.

    Supported formats:
        1. Export format (written by export_progress):
            {"currentDay": 3, "streak": 2, "level": 1, "levelProgress": 20,
             "days": [...]}

        2. Store format (raw .storage file):
            {"version": 1, "minor_version": 1, "key": "pushup_journey_data",
             "data": {"currentDay": 3, ...}}

    Returns:
        A fresh progress dict. Nothing shared with the caller.

    Raises:
        InvalidProgressDataError: If the text is not JSON or fails validation.
    """
    try:
        data = json.loads(json_str)
    except (TypeError, ValueError) as err:
        raise InvalidProgressDataError(f"Invalid JSON: {err}") from err

    if (
        isinstance(data, dict)
        and const.DATA_CURRENT_DAY not in data
        and isinstance(data.get("data"), dict)
        and "version" in data
    ):
        const.LOGGER.debug("DEBUG: Unwrapping Store-format progress payload")
        data = data["data"]

    return copy.deepcopy(validate_progress_data(data))


def build_export_filename(today: date) -> str:
    """Return the export file name for a date.

    Example:
        build_export_filename(date(2025, 4, 7)) → "pushup-journey-export-2025-04-07.json"
    """
    return const.EXPORT_FILENAME_FMT.format(date=dt_to_iso_date(today))


async def async_write_export_file(
    hass: HomeAssistant, progress: UserProgressData, today: date
) -> tuple[str, str]:
    """Write an export of progress into <config>/pushup_journey/.

    Returns:
        Tuple of (absolute file path, exported JSON text).

    Raises:
        OSError: If the file cannot be written.
    """
    content = export_progress_json(progress)
    path = hass.config.path(const.EXPORT_DIRECTORY, build_export_filename(today))
    await hass.async_add_executor_job(_write_text_file, path, content)
    const.LOGGER.info("INFO: Exported progress to %s", path)
    return path, content


# ==============================================================================
# Storage Backups
# ==============================================================================


async def create_timestamped_backup(
    hass: HomeAssistant,
    store: PushupJourneyStore,
    tag: str,
) -> str | None:
    """Copy the progress storage file next to itself with a timestamped name.

    Args:
        hass: Home Assistant instance
        store: Store whose progress file is copied
        tag: Backup tag (e.g., 'reset', 'pre-import')

    Returns:
        Filename of the created backup
        (e.g., 'pushup_journey_data_2025-04-07_14-30-22_reset') or None if
        there was nothing to copy or the copy failed.
    """
    try:
        timestamp = dt_util.utcnow().strftime("%Y-%m-%d_%H-%M-%S")
        filename = const.BACKUP_FILENAME_FMT.format(
            key=const.STORAGE_KEY, timestamp=timestamp, tag=tag
        )

        storage_path = store.get_storage_path()
        if not await hass.async_add_executor_job(os.path.exists, storage_path):
            const.LOGGER.warning(
                "WARNING: Storage file does not exist, cannot create %s backup", tag
            )
            return None

        backup_path = hass.config.path(".storage", filename)
        await hass.async_add_executor_job(shutil.copy2, storage_path, backup_path)
        const.LOGGER.info("INFO: Created backup: %s", filename)
        return filename

    except OSError as ex:
        const.LOGGER.error("ERROR: Failed to create backup with tag %s: %s", tag, ex)
        return None
