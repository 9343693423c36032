"""ConfigManager — environment profiles, .env loading and logging setup."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from diabreport.config import DEFAULT_PAGE_SIZE, DEFAULT_TIMEZONE, PAGE_SIZE_OPTIONS

logger = logging.getLogger(__name__)

PROFILE_VARIABLE = "DIABREPORT_ENV"
DEFAULT_PROFILE = "development"

# key -> (default, description)
_CONFIG_KEYS: dict[str, tuple[str, str]] = {
    "DIABREPORT_LOG_LEVEL": ("INFO", "Logging level"),
    "DIABREPORT_TIMEZONE": (DEFAULT_TIMEZONE, "Time zone of dates shown in reports"),
    "DIABREPORT_OUTPUT_DIR": ("exports", "Directory for exported files"),
    "DIABREPORT_DATA_FILE": ("", "JSON export of the document store"),
    "DIABREPORT_PAGE_SIZE": (str(DEFAULT_PAGE_SIZE), "On-screen page size (10, 25 or 50)"),
    "DIABREPORT_PDF_COMPRESSION": ("false", "Compress PDF page streams"),
}

_PROFILES: dict[str, dict[str, str]] = {
    "development": {"DIABREPORT_LOG_LEVEL": "DEBUG"},
    "production": {"DIABREPORT_LOG_LEVEL": "WARNING", "DIABREPORT_PDF_COMPRESSION": "true"},
    "testing": {"DIABREPORT_LOG_LEVEL": "DEBUG", "DIABREPORT_TIMEZONE": "UTC"},
}

_TRUE_VALUES = {"1", "true", "yes", "on"}


def as_bool(value: str | None) -> bool:
    return str(value or "").strip().lower() in _TRUE_VALUES


def read_env_file(path: Path) -> dict[str, str]:
    """``KEY=value`` pairs of a .env file; blank lines and comments skipped."""
    if not path.is_file():
        return {}
    values: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip().strip('"').strip("'")
    return values


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Apply *level* to the ``diabreport`` logger tree.

    A stream handler is attached only when the root logger has none, so
    host applications keep control of formatting.
    """
    package_logger = logging.getLogger("diabreport")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    package_logger.setLevel(level)
    if not logging.getLogger().handlers and not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        package_logger.addHandler(handler)
    return package_logger


class ConfigManager:
    """Resolve the settings :meth:`ReportEngine.from_config` consumes.

    Parameters
    ----------
    profile:
        ``development``, ``production`` or ``testing``.  Defaults to
        ``$DIABREPORT_ENV``, then ``development``.
    """

    def __init__(self, profile: str | None = None) -> None:
        self.profile = (profile or os.environ.get(PROFILE_VARIABLE) or DEFAULT_PROFILE).lower()
        if self.profile not in _PROFILES:
            logger.warning("Unknown profile %r, using %s", self.profile, DEFAULT_PROFILE)
            self.profile = DEFAULT_PROFILE

    def generate_env_template(self, project_path: str | Path) -> Path:
        """Write ``.env.example`` listing every key with its default."""
        env_path = Path(project_path) / ".env.example"
        lines = [f"# diabreport settings ({PROFILE_VARIABLE} selects the profile)", ""]
        for key, (default, description) in _CONFIG_KEYS.items():
            lines += [f"# {description}", f"{key}={default}", ""]
        env_path.write_text("\n".join(lines), encoding="utf-8")
        return env_path

    def load_config(self, project_path: str | Path) -> dict[str, str]:
        """Merge defaults, the profile, ``<project_path>/.env`` and the environment.

        Later layers win.  Page size and time zone are checked last and
        fall back to their defaults when unusable, so a bad value is
        reported here instead of failing the first report run.
        """
        config = {key: default for key, (default, _) in _CONFIG_KEYS.items()}
        config.update(_PROFILES[self.profile])
        config.update(read_env_file(Path(project_path) / ".env"))
        config.update({key: os.environ[key] for key in _CONFIG_KEYS if key in os.environ})
        return self._checked(config)

    @staticmethod
    def _checked(config: dict[str, str]) -> dict[str, str]:
        size = config["DIABREPORT_PAGE_SIZE"].strip()
        if not size.isdigit() or int(size) not in PAGE_SIZE_OPTIONS:
            logger.warning("DIABREPORT_PAGE_SIZE=%r is not one of %s", size, PAGE_SIZE_OPTIONS)
            size = str(DEFAULT_PAGE_SIZE)
        config["DIABREPORT_PAGE_SIZE"] = size

        try:
            ZoneInfo(config["DIABREPORT_TIMEZONE"])
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown time zone %r", config["DIABREPORT_TIMEZONE"])
            config["DIABREPORT_TIMEZONE"] = DEFAULT_TIMEZONE
        return config
