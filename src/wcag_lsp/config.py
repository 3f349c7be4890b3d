from __future__ import annotations

import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from pydantic import ValidationError

from wcag_lsp.policy import Policy
from wcag_lsp.schema import PolicyFile

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".wcag-lsp.toml"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


def _loads(raw: str) -> TomlTable:
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        logger.debug("policy file is not valid TOML; using defaults")
        return {}
    return data if isinstance(data, dict) else {}


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError):
        logger.debug("policy file %s unreadable; using defaults", path)
        return {}
    return _loads(raw)


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def policy_from_table(data: TomlTable) -> Policy:
    try:
        parsed = PolicyFile.model_validate(data)
    except ValidationError:
        logger.debug("policy file has unexpected shape; using defaults")
        return Policy()
    return Policy.from_file(parsed)


def load_policy(root: Path | None = None, config_path: Path | None = None) -> Policy:
    """Best-effort policy load; never raises."""
    return policy_from_table(load_config(root=root, config_path=config_path))
