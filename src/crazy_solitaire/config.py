# config.py - game rules configuration, persisted display settings and logging
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

# Defaults (may be overridden by persisted settings)
_DEFAULT_SETTINGS = {
    "card_size": "Medium",   # Small | Medium | Large
    "back_color": "Green",   # Green | Blue | Red
}

_CURRENT_SETTINGS = dict(_DEFAULT_SETTINGS)

ENV_SEED = "CRAZY_SOLITAIRE_SEED"
ENV_LOG_LEVEL = "CRAZY_SOLITAIRE_LOG_LEVEL"
ENV_CARD_SIZE = "CRAZY_SOLITAIRE_CARD_SIZE"

LOG_FILENAME = "crazy_solitaire.log"


@dataclass(frozen=True)
class GameConfig:
    draw_count: int = 3
    max_stock_reloads: int = 3
    tableau_columns: int = 7
    seed: Optional[int] = None

    def __post_init__(self):
        if self.draw_count < 1:
            raise ValueError(f"draw_count must be at least 1, got {self.draw_count}")
        if self.max_stock_reloads < 0:
            raise ValueError(f"max_stock_reloads cannot be negative, got {self.max_stock_reloads}")
        if self.tableau_columns < 1:
            raise ValueError(f"tableau_columns must be at least 1, got {self.tableau_columns}")

    @classmethod
    def from_env(cls, environ=None) -> "GameConfig":
        environ = os.environ if environ is None else environ
        raw = environ.get(ENV_SEED, "").strip()
        if not raw:
            return cls()
        try:
            return cls(seed=int(raw))
        except ValueError:
            logging.getLogger(__name__).warning("ignoring non-integer %s=%r", ENV_SEED, raw)
            return cls()


def _settings_dir() -> str:
    # Prefer %APPDATA% on Windows, else ~/.crazy_solitaire
    base = os.environ.get("APPDATA")
    if base:
        return os.path.join(base, "CrazySolitaire")
    return os.path.join(os.path.expanduser("~"), ".crazy_solitaire")


def _settings_path() -> str:
    return os.path.join(_settings_dir(), "settings.json")


def get_current_settings():
    return dict(_CURRENT_SETTINGS)


def load_settings():
    global _CURRENT_SETTINGS
    try:
        with open(_settings_path(), "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        data = None
    if isinstance(data, dict):
        _CURRENT_SETTINGS.update({
            "card_size": data.get("card_size", _CURRENT_SETTINGS["card_size"]),
            "back_color": data.get("back_color", _CURRENT_SETTINGS["back_color"]),
        })
    size_override = os.environ.get(ENV_CARD_SIZE, "").strip().capitalize()
    if size_override in ("Small", "Medium", "Large"):
        _CURRENT_SETTINGS["card_size"] = size_override
    return get_current_settings()


def save_settings(new_values: dict):
    # Merge and write to disk
    _CURRENT_SETTINGS.update({
        k: new_values[k] for k in ("card_size", "back_color") if k in new_values
    })
    try:
        os.makedirs(_settings_dir(), exist_ok=True)
        with open(_settings_path(), "w", encoding="utf-8") as f:
            json.dump(_CURRENT_SETTINGS, f, indent=2)
    except OSError as exc:
        logging.getLogger(__name__).warning("Failed to save settings: %s", exc)


def configure_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> logging.Logger:
    """Attach a file handler to the package logger, once."""
    logger = logging.getLogger("crazy_solitaire")
    level_name = (level or os.environ.get(ENV_LOG_LEVEL, "") or "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    if not logger.handlers:
        directory = log_dir or _settings_dir()
        os.makedirs(directory, exist_ok=True)
        handler = logging.FileHandler(os.path.join(directory, LOG_FILENAME), encoding="utf-8")
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger
