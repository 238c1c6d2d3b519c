from __future__ import annotations

from dataclasses import asdict, dataclass
import os
from pathlib import Path
from typing import Any, Mapping


ENV_PREFIX = "GNUEXPLORE_"

_ENV_KEYS: dict[str, str] = {
    "root": "ROOT",
    "data_dir": "DATA_DIR",
    "plots_dir": "PLOTS_DIR",
    "executable": "GNUPLOT",
}


@dataclass(frozen=True)
class OutputSettings:
    """Where data files and scripts go, and which gnuplot binary renders them."""

    root: Path = Path(".")
    data_dir: str = "data"
    plots_dir: str = "plots"
    executable: str = "gnuplot"

    @property
    def data_root(self) -> Path:
        return self.root / self.data_dir

    @property
    def plots_root(self) -> Path:
        return self.root / self.plots_dir


DEFAULT_SETTINGS = OutputSettings()


def resolve_settings(overrides: Mapping[str, Any] | None = None) -> OutputSettings:
    """Validate and merge overrides against the defaults."""

    raw: dict[str, Any] = asdict(DEFAULT_SETTINGS)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown output setting: {key}")
            raw[key] = value

    for key in ("data_dir", "plots_dir"):
        value = raw[key]
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Setting `{key}` must be a non-empty string")
        if Path(value).is_absolute():
            raise ValueError(f"Setting `{key}` must be relative to `root`")

    if not isinstance(raw["executable"], str) or not raw["executable"].strip():
        raise ValueError("Setting `executable` must be a non-empty string")

    if not isinstance(raw["root"], (str, Path)) or not str(raw["root"]).strip():
        raise ValueError("Setting `root` must be a path")

    return OutputSettings(
        root=Path(raw["root"]),
        data_dir=str(raw["data_dir"]),
        plots_dir=str(raw["plots_dir"]),
        executable=str(raw["executable"]),
    )


def settings_from_env(environ: Mapping[str, str] | None = None) -> OutputSettings:
    env = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for key, suffix in _ENV_KEYS.items():
        value = env.get(ENV_PREFIX + suffix)
        if value:
            overrides[key] = value
    return resolve_settings(overrides)
