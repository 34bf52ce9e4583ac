"""Persistence of the last used task between sessions."""
import json
import logging
import os
from pathlib import Path
from typing import Optional

from models import LastTask

logger = logging.getLogger(__name__)

DIR_MODE = 0o700
FILE_MODE = 0o600


class PreferenceError(Exception):
    """Raised when the last task cannot be written."""


class LastTaskStore:
    """
    Remembers the task the user last booked on.

    Stored as JSON in ``<config_dir>/last_task.json``. The directory is only
    readable by the user and the file is created with mode 0600.
    """

    def __init__(self, config_dir: Path):
        self.config_dir = Path(config_dir).expanduser()
        self.state_file = self.config_dir / "last_task.json"

    def _ensure_dir(self) -> None:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        os.chmod(self.config_dir, DIR_MODE)

    def _write(self, text: str) -> None:
        fd = os.open(self.state_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with os.fdopen(fd, "w") as f:
            f.write(text)
        os.chmod(self.state_file, FILE_MODE)

    def load(self) -> Optional[LastTask]:
        """
        Load the last task.

        A missing file is created empty. Missing, empty and unreadable files
        all mean "no last task".

        Returns:
            LastTask, or None if nothing usable is stored
        """
        try:
            self._ensure_dir()
            if not self.state_file.exists():
                self._write("{}")
                return None
            text = self.state_file.read_text()
        except OSError as e:
            logger.warning("Could not read %s: %s", self.state_file, e)
            return None

        if not text.strip():
            return None

        try:
            data = json.loads(text)
            if not data:
                return None
            return LastTask(
                project_id=int(data["project_id"]),
                task_id=int(data["task_id"]),
                task_title=str(data.get("task_title", "")),
            )
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            # Corrupted file, start fresh
            logger.warning("Ignoring unreadable last task file %s", self.state_file)
            return None

    def save(self, last_task: LastTask) -> None:
        """
        Save the last task.

        Raises:
            PreferenceError: If the file cannot be written
        """
        data = {
            "project_id": last_task.project_id,
            "task_id": last_task.task_id,
            "task_title": last_task.task_title,
        }
        try:
            self._ensure_dir()
            self._write(json.dumps(data))
        except OSError as e:
            logger.error("Could not save last task to %s: %s", self.state_file, e)
            raise PreferenceError(f"could not save last task: {e}") from e
        logger.debug("Saved last task %s", data)
