# pydaptivenlms/__init__.py

from .base import AdaptiveFilter, OptimizationResult
from .lms import *
from ._utils.system_id import (
    ReferenceFilter,
    SystemIDConfig,
    SystemIDReport,
    run_system_identification,
)
from ._utils.progress import ProgressConfig

__version__ = "0.1.0"

__all__ = ["AdaptiveFilter", "OptimizationResult",
    "NLMS", "NLMSConfig", "NLMSState", "squared_norm",
    "ReferenceFilter", "SystemIDConfig", "SystemIDReport", "run_system_identification",
    "ProgressConfig",
    "info"]


def info():
    """Print an overview of the library."""
    print("\n" + "="*70)
    print("      PyDaptive NLMS - Sample-by-sample NLMS engine")
    print("="*70)
    sections = {
        "Engine": "NLMS (desired-signal and error-signal entry points)",
        "Driver": "AdaptiveFilter.optimize / filter_signal / reset_filter",
        "System ID": "ReferenceFilter, run_system_identification",
    }
    for name, items in sections.items():
        print(f"\n{name:25}: {items}")

    print("\n" + "-"*70)
    print("Usage example: from pydaptivenlms import NLMS")
    print("Documentation: help(pydaptivenlms.NLMS)")
    print("="*70 + "\n")
