# pydaptivenlms/lms/__init__.py

from .nlms import NLMS, NLMSConfig, NLMSState, squared_norm

__all__ = [
    "NLMS",
    "NLMSConfig",
    "NLMSState",
    "squared_norm",
]
