from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import tomllib

CONFIG_ENV_VAR = "MOVINGIMAGES_CONFIG"
EXECUTABLE_ENV_VAR = "MOVINGIMAGES_SMIG"


@dataclass(frozen=True)
class SmigConfig:
    executable: str = "smig"
    timeout_s: float | None = None
    # Payloads larger than this go through a temporary -jsonfile instead of argv.
    jsonfile_threshold: int = 65536

    def __post_init__(self) -> None:
        if not self.executable:
            raise ValueError("executable must not be empty")
        if self.timeout_s is not None and self.timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")
        if self.jsonfile_threshold <= 0:
            raise ValueError("jsonfile_threshold must be > 0")


def load_smig_config(path: str | Path | None = None) -> SmigConfig:
    """Reads the `[smig]` table of a TOML file.

    Without an explicit path the file named by `MOVINGIMAGES_CONFIG` is used,
    if set. `MOVINGIMAGES_SMIG` overrides the executable either way.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        path = Path(env_path) if env_path else None
    raw: dict[str, object] = {}
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"smig config not found: {config_path}")
        with config_path.open("rb") as f:
            document = tomllib.load(f)
        table = document.get("smig", {})
        if not isinstance(table, dict):
            raise ValueError("smig config section must be a table")
        raw = table
    executable = os.environ.get(EXECUTABLE_ENV_VAR) or _coerce_optional_str(raw.get("executable"), "executable")
    timeout_s = _coerce_optional_number(raw.get("timeout_s"), "timeout_s")
    threshold = raw.get("jsonfile_threshold", SmigConfig.jsonfile_threshold)
    if not isinstance(threshold, int) or isinstance(threshold, bool):
        raise ValueError("jsonfile_threshold must be an integer")
    return SmigConfig(
        executable=executable or SmigConfig.executable,
        timeout_s=timeout_s,
        jsonfile_threshold=threshold,
    )


def _coerce_optional_str(value: object, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string if provided")
    return value


def _coerce_optional_number(value: object, field_name: str) -> float | None:
    if value is None:
        return None
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise ValueError(f"{field_name} must be a number if provided")
    return float(value)
