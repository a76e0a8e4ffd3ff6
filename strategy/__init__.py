# PATH: strategy/__init__.py
"""Strategy package for XARB: path calculation, selection and monitoring."""

from strategy.monitor import MonitorScheduler
from strategy.path_calculator import PathCalculator
from strategy.selector import OpportunitySelector, classify, select_best

__all__ = [
    "MonitorScheduler",
    "OpportunitySelector",
    "PathCalculator",
    "classify",
    "select_best",
]
