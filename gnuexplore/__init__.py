from gnuexplore.comparison import Comparison
from gnuexplore.configuration import Configuration, Style
from gnuexplore.errors import PlotDataError
from gnuexplore.kinds import SeriesKind
from gnuexplore.series import Data, Distribution, Process, Sequence, SequenceBin, Series
from gnuexplore.settings import OutputSettings, resolve_settings, settings_from_env

__all__ = [
    "Comparison",
    "Configuration",
    "Data",
    "Distribution",
    "OutputSettings",
    "PlotDataError",
    "Process",
    "Sequence",
    "SequenceBin",
    "Series",
    "SeriesKind",
    "Style",
    "resolve_settings",
    "settings_from_env",
]
