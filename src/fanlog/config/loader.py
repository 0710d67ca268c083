"""Config file discovery and YAML loading."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import yaml
from pydantic import ValidationError

from fanlog.config.logging import LogConfig, RootConfig
from fanlog.exceptions import LoggingConfigError


def discover_config_file(candidates: Iterable[str], base_dir: str | Path | None = None) -> Path | None:
    """Return the first candidate that exists, probed in the given order.

    Args:
        candidates: File names, highest priority first
        base_dir: Directory to probe (default: current working directory)

    Returns:
        Path of the first existing file, or None
    """
    root = Path(base_dir) if base_dir is not None else Path.cwd()
    for name in candidates:
        path = root / name
        if path.is_file():
            return path
    return None


def load_log_configs(path: str | Path) -> list[LogConfig]:
    """Load the ``fanlog.log`` sink list from a YAML file.

    Args:
        path: Path to the YAML config file

    Returns:
        Sink configurations in file order (empty for an empty file)

    Raises:
        LoggingConfigError: If the file cannot be read, parsed or validated
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LoggingConfigError(f"cannot read config file {path}: {exc}", details={"path": str(path)}) from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise LoggingConfigError(f"malformed config file {path}: {exc}", details={"path": str(path)}) from exc

    if data is None:
        return []

    try:
        root = RootConfig.model_validate(data)
    except ValidationError as exc:
        raise LoggingConfigError(
            f"invalid logging config in {path}: {exc}",
            details={"path": str(path), "errors": exc.errors(include_url=False)},
        ) from exc

    return list(root.fanlog.log)
