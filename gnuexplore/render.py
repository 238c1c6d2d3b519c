from __future__ import annotations

import logging
from pathlib import Path
import subprocess

from gnuexplore.settings import OutputSettings, settings_from_env

LOGGER = logging.getLogger(__name__)


def build_command(script_path: str | Path, settings: OutputSettings | None = None) -> list[str]:
    cfg = settings or settings_from_env()
    return [cfg.executable, str(Path(script_path).resolve())]


def launch(script_path: str | Path, *, settings: OutputSettings | None = None) -> subprocess.Popen[bytes]:
    """Start gnuplot on ``script_path`` and return without waiting for it.

    The script refers to its data relative to the output root, so gnuplot runs
    from there. Spawn failures (e.g. gnuplot not installed) propagate.
    """
    cfg = settings or settings_from_env()
    command = build_command(script_path, cfg)
    LOGGER.info("launching %s", " ".join(command))
    return subprocess.Popen(command, cwd=str(cfg.root), start_new_session=True)
