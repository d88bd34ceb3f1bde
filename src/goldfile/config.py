from __future__ import annotations

import math
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict


@dataclass(frozen=True)
class Config:
    golden_dir: str = "goldens"
    tolerance: float = 0.0
    update_goldens: bool = False
    write_failures: bool = True
    failures_dir: str = "failures"


_ENV_PREFIX = "GOLDFILE_"


def _find_pyproject(start_dir: Path) -> Path | None:
    for directory in (start_dir, *start_dir.parents):
        candidate = directory / "pyproject.toml"
        if candidate.exists():
            return candidate
    return None


def _load_toml(path: Path) -> Dict[str, Any]:
    try:
        import tomllib  # py311+
    except ModuleNotFoundError:
        import tomli as tomllib

    return tomllib.loads(path.read_text(encoding="utf-8"))


def _to_float(value: Any, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _to_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    return default


def _from_sources(raw: Dict[str, Any]) -> Config:
    golden_dir = os.getenv(f"{_ENV_PREFIX}GOLDEN_DIR", raw.get("golden_dir", "goldens"))
    tolerance = _to_float(os.getenv(f"{_ENV_PREFIX}TOLERANCE", raw.get("tolerance", 0.0)), 0.0)
    update_goldens = _to_bool(os.getenv(f"{_ENV_PREFIX}UPDATE_GOLDENS", raw.get("update_goldens", False)), False)
    write_failures = _to_bool(os.getenv(f"{_ENV_PREFIX}WRITE_FAILURES", raw.get("write_failures", True)), True)
    failures_dir = os.getenv(f"{_ENV_PREFIX}FAILURES_DIR", raw.get("failures_dir", "failures"))

    return Config(
        golden_dir=str(golden_dir),
        tolerance=max(0.0, min(1.0, tolerance)),
        update_goldens=update_goldens,
        write_failures=write_failures,
        failures_dir=str(failures_dir),
    )


@lru_cache(maxsize=32)
def load_config(start_dir: str | os.PathLike[str] | None = None) -> Config:
    root = Path(start_dir or os.getcwd()).resolve()
    pyproject = _find_pyproject(root)
    if pyproject is None:
        return _from_sources({})

    parsed = _load_toml(pyproject)
    tool = parsed.get("tool", {}) if isinstance(parsed, dict) else {}
    section = tool.get("goldfile", {}) if isinstance(tool, dict) else {}
    return _from_sources(section if isinstance(section, dict) else {})


def get_config() -> Config:
    return load_config(os.getcwd())


def refresh_config(start_dir: str | os.PathLike[str] | None = None) -> Config:
    load_config.cache_clear()
    return load_config(start_dir)
