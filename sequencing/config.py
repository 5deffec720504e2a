"""User-configurable settings for building trial sequences.

Settings are read from a YAML file. The file is looked up in this order:

1. the path passed to :meth:`Settings.load`,
2. the path in the ``SEQUENCING_CONFIG`` environment variable,
3. ``sequencing_config.yaml`` in the current working directory.

Keys are case-insensitive, ``experiment_version`` and ``EXPERIMENT_VERSION``
refer to the same setting.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from . import constants
from .presets import get_preset, parse_presets

logger = logging.getLogger(__name__)

DEFAULTS = {
    "EXPERIMENT_VERSION": "mturk_pilot",
    "QUESTION_BANK_PATH": None,
    "RANDOM_SEED": None,
    "RANDOMISE_ANSWER_ORDER": True,
    "OUTPUT_DIR": Path("output"),
    "CONSOLE_LOG_LEVEL": "WARNING",
    "FILE_LOG_LEVEL": "INFO",
    "PRESETS": {},
    "TIMING": {},
    "DATA_RECORD_FREQUENCY": constants.DATA_RECORD_FREQUENCY,
}


class Settings:
    """Container for all user-configurable settings."""

    def __init__(self):
        object.__setattr__(self, "_loaded", False)
        object.__setattr__(self, "_config_path", None)
        for key, value in DEFAULTS.items():
            object.__setattr__(self, key, value.copy() if isinstance(value, dict) else value)

    def __getattr__(self, name: str) -> Any:
        # only called when the normal lookup fails, e.g. for lower-case names
        if name.startswith("_") or name.upper() == name:
            raise AttributeError(f"'{type(self).__name__}' has no setting '{name}'")
        return getattr(self, name.upper())

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return

        key = name.upper()
        if key in self.__dict__:
            old = self.__dict__[key]
            if old != value:
                logger.debug(f"Changing setting {key}: {old} -> {value}")
        else:
            logger.debug(f"Setting new attribute {key}: {value}")
        object.__setattr__(self, key, value)

    @property
    def config_path(self) -> Path | None:
        return self._config_path

    def update(self, values: Mapping[str, Any]) -> None:
        for key, value in values.items():
            setattr(self, str(key), value)

    def _find_config(self, path: Path | str | None = None) -> Path | None:
        if path is not None:
            return Path(path)
        env_path = os.environ.get(constants.CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path)
        cwd_path = Path.cwd() / constants.DEFAULT_CONFIG_FILE
        if cwd_path.exists():
            return cwd_path
        return None

    def load(self, path: Path | str | None = None) -> None:
        """Load settings from a YAML file and validate them.

        Parameters
        ----------
        path : Path | str, optional
            Config file. If not given, the environment variable and then the
            current working directory are checked. Without any config file the
            defaults are kept.

        Raises
        ------
        FileNotFoundError
            If an explicitly given or environment-provided file does not exist.
        ValueError
            If the file content is not a mapping or the settings are invalid.
        """
        config_path = self._find_config(path)
        self._loaded = True
        if config_path is None:
            logger.debug("No config file found, using default settings.")
            self._validate()
            return

        config_path = config_path.resolve()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file {config_path} does not exist.")

        logger.info(f"Loading config from: {config_path}")
        with open(config_path, encoding="utf-8") as f:
            content = yaml.safe_load(f) or {}
        if not isinstance(content, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping of settings.")

        self._config_path = config_path
        self.update(content)
        self._validate()

    def ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _validate(self) -> None:
        if not self.EXPERIMENT_VERSION:
            raise ValueError("EXPERIMENT_VERSION is required. Set it in the config file or pass it explicitly.")
        if self.RANDOM_SEED is not None and (isinstance(self.RANDOM_SEED, bool) or not isinstance(self.RANDOM_SEED, int)):
            raise ValueError(f"RANDOM_SEED must be an integer, got {self.RANDOM_SEED!r}.")
        if not isinstance(self.TIMING, Mapping):
            raise ValueError("TIMING must be a mapping of timing parameter names to seconds.")
        parse_presets(self.PRESETS)
        get_preset(self.EXPERIMENT_VERSION, self.PRESETS)

    def setup_logging(self, log_file: Path | str | None = None) -> None:
        from .utils.logging import setup_logging

        setup_logging(
            log_file=log_file,
            console_level=self.CONSOLE_LOG_LEVEL,
            file_level=self.FILE_LOG_LEVEL,
        )

    def __repr__(self) -> str:
        values = {k: v for k, v in self.__dict__.items() if not k.startswith("_")}
        return f"Settings({values})"


settings = Settings()
