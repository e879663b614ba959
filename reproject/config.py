"""Persistent JSON config helpers.

Stores the ignored entry names and the output file name used by the file sink.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "reproject"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
DEFAULT_OUTPUT_FILE_NAME = "structure.txt"


@dataclass(frozen=True)
class ProjectConfig:
    """Settings read once per invocation."""

    ignore_patterns: tuple[str, ...] = ()
    output_file_name: str = DEFAULT_OUTPUT_FILE_NAME

    def with_overrides(
        self,
        extra_ignore_patterns: list[str] | None = None,
        output_file_name: str | None = None,
    ) -> "ProjectConfig":
        """Return a copy with CLI-supplied patterns appended and name replaced."""
        patterns = list(self.ignore_patterns)
        for pattern in extra_ignore_patterns or ():
            if pattern and pattern not in patterns:
                patterns.append(pattern)
        name = self.output_file_name
        if output_file_name is not None and output_file_name.strip():
            name = output_file_name.strip()
        return ProjectConfig(ignore_patterns=tuple(patterns), output_file_name=name)


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except Exception as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object], path: Path | None = None) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is logged and ignored to keep runtime
    behavior non-fatal when config cannot be written.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except Exception as exc:
        logger.warning("Could not write config %s: %s", config_path, exc)


def _coerce_ignore_patterns(value: object) -> tuple[str, ...]:
    """Keep non-empty string names in order, dropping duplicates and other types."""
    if not isinstance(value, list):
        return ()
    patterns: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item:
            continue
        if item not in patterns:
            patterns.append(item)
    return tuple(patterns)


def _coerce_output_file_name(value: object) -> str:
    if not isinstance(value, str):
        return DEFAULT_OUTPUT_FILE_NAME
    stripped = value.strip()
    return stripped if stripped else DEFAULT_OUTPUT_FILE_NAME


def load_project_config(path: Path | None = None) -> ProjectConfig:
    """Load and sanitize ``ignore_patterns`` and ``output_file_name``."""
    data = load_config(path)
    return ProjectConfig(
        ignore_patterns=_coerce_ignore_patterns(data.get("ignore_patterns")),
        output_file_name=_coerce_output_file_name(data.get("output_file_name")),
    )


def save_project_config(project_config: ProjectConfig, path: Path | None = None) -> None:
    """Persist ``project_config`` while keeping unrelated keys intact."""
    data = load_config(path)
    data["ignore_patterns"] = list(project_config.ignore_patterns)
    data["output_file_name"] = project_config.output_file_name
    save_config(data, path)
