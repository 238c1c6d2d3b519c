from __future__ import annotations

from enum import Enum


class SeriesKind(Enum):
    SEQUENCE = "sequence"
    PROCESS = "process"
    DISTRIBUTION = "distribution"
    SEQUENCE_BIN = "sequence_bin"
    DATA = "data"
