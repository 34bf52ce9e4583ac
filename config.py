"""Configuration settings for the MOCO time entry client."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv


DEFAULT_CONFIG_DIR = Path("~/.moco").expanduser()


class ConfigError(Exception):
    """Raised when required startup settings are missing."""


@dataclass
class Config:
    """Application configuration settings.

    Built once at startup and handed to the gateway, the controller and every
    render widget. Nothing reads settings from module globals.
    """
    # Credentials
    domain: str
    api_key: str

    # Timing (seconds)
    refresh_interval: float = 10.0
    message_timeout: float = 2.0
    request_timeout: float = 10.0

    # Entries window: reference day plus this many days back
    history_days: int = 6

    # Layout
    form_height: int = 12

    # File system
    config_dir: Path = DEFAULT_CONFIG_DIR
    log_dir: Path = DEFAULT_CONFIG_DIR / "logs"

    # Colors
    color_primary: str = "#5f5fff"  # Titles and selection
    color_border: str = "#5f5fff"  # Unfocused pane border
    color_focused: str = "#ffffff"  # Focused pane border
    color_error: str = "#ff0000"
    color_success: str = "#00ff00"
    color_dim: str = "#585858"  # Last update, hints
    color_header: str = "#808000"  # Date headers
    color_total: str = "#008080"  # Daily totals

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}.mocoapp.com/api/v1"

    @classmethod
    def load(cls, env_file: Optional[Path] = None) -> 'Config':
        """
        Load configuration from the environment.

        A ``.env`` file is read first if one exists: the explicit ``env_file``,
        else the nearest ``.env`` from the working directory, else
        ``~/.moco/.env``. Variables already set in the environment win.

        Returns:
            Config with credentials from MOCO_DOMAIN and MOCO_API_KEY

        Raises:
            ConfigError: If either variable is missing or blank
        """
        if env_file is not None:
            load_dotenv(env_file)
        else:
            found = find_dotenv(usecwd=True)
            load_dotenv(found or DEFAULT_CONFIG_DIR / ".env")

        domain = os.environ.get("MOCO_DOMAIN", "").strip()
        api_key = os.environ.get("MOCO_API_KEY", "").strip()
        if not domain or not api_key:
            raise ConfigError("MOCO_DOMAIN and MOCO_API_KEY environment variables must be set")

        return cls(domain=domain, api_key=api_key)
