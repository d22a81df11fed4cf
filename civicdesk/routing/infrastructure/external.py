"""
Department Configuration Loading
================================

YAML-backed department table with hot reload via watchdog.
"""

import threading
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from civicdesk.config import settings
from civicdesk.core import ConfigurationException
from civicdesk.routing.application.services import IDepartmentProvider
from civicdesk.routing.domain import DepartmentConfig
from civicdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class ConfigFileHandler(FileSystemEventHandler):
    """Watchdog event handler for department config file changes."""

    def __init__(self, config_manager: "DepartmentConfigManager", config_path: Path):
        self.config_manager = config_manager
        self.config_path = config_path
        super().__init__()

    def on_modified(self, event):
        if event.is_directory:
            return
        if Path(event.src_path).resolve() == self.config_path.resolve():
            logger.info("Department config file changed", extra={"path": str(event.src_path)})
            self.config_manager.reload()


class DepartmentConfigManager(IDepartmentProvider):
    """
    Thread-safe department table holder with hot-reload support.

    A reload that fails validation keeps the previous table in place.
    """

    def __init__(self):
        self._config: Optional[DepartmentConfig] = None
        self._lock = threading.Lock()
        self._path: Optional[Path] = None
        self._observer = None

    def load(self, path: Path) -> DepartmentConfig:
        """
        Initial configuration load.

        Raises:
            ConfigurationException: If the file exists but is invalid
        """
        self._path = Path(path)
        try:
            config = self._load_from_file(self._path)
        except (yaml.YAMLError, ValidationError) as e:
            raise ConfigurationException(
                f"Invalid department config {self._path}: {e}",
                {"path": str(self._path)}
            ) from e
        with self._lock:
            self._config = config
        logger.info(
            "Department configuration loaded",
            extra={"path": str(self._path), "departments": config.names}
        )
        return config

    def _load_from_file(self, path: Path) -> DepartmentConfig:
        """Load and parse YAML config file."""
        if not path.exists():
            logger.warning(
                "Department config file not found, using built-in table",
                extra={"path": str(path)}
            )
            return DepartmentConfig()

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        return DepartmentConfig.model_validate(data)

    def reload(self) -> bool:
        """Reload configuration from file."""
        if self._path is None:
            return False

        try:
            new_config = self._load_from_file(self._path)
        except (yaml.YAMLError, ValidationError) as e:
            logger.error(
                "Failed to reload department config, keeping previous table",
                extra={"path": str(self._path), "error": str(e)}
            )
            return False

        with self._lock:
            self._config = new_config
        logger.info("Department configuration reloaded", extra={"departments": new_config.names})
        return True

    def start_watching(self) -> None:
        """
        Start watching the configuration file for changes.

        Skips watching when the file does not exist.
        """
        if self._path is None:
            raise RuntimeError("Config not loaded. Call load() first.")

        if not self._path.exists():
            logger.info(
                "Department config file doesn't exist, skipping file watch",
                extra={"path": str(self._path)}
            )
            return

        try:
            self._observer = Observer()
            handler = ConfigFileHandler(self, self._path)
            self._observer.schedule(handler, str(self._path.parent.resolve()), recursive=False)
            self._observer.start()
            logger.info("Started watching department config", extra={"path": str(self._path)})
        except OSError as e:
            # inotify is unavailable in some containers
            logger.warning(f"File watching not available, using static config: {e}")
            self._observer = None

    def stop_watching(self) -> None:
        """Stop watching configuration file (safe to call even if not watching)."""
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5)
            self._observer = None

    @property
    def is_loaded(self) -> bool:
        return self._config is not None

    @property
    def config(self) -> DepartmentConfig:
        with self._lock:
            if self._config is None:
                raise RuntimeError("Department configuration not loaded")
            return self._config

    def get_config(self) -> DepartmentConfig:
        return self.config


department_config_manager = DepartmentConfigManager()


def get_department_provider() -> IDepartmentProvider:
    """
    FastAPI dependency returning the process-wide department table.

    Loads from settings.department_config_path on first use when the
    application lifespan has not done so already.
    """
    if not department_config_manager.is_loaded:
        department_config_manager.load(settings.department_config_path)
    return department_config_manager
