"""
Compiler backends.

Interchangeable stylesheet compilers behind one interface.
"""

from sassyflow.pipeline.backends.base import CSS_ENCODING, BaseBackend
from sassyflow.pipeline.backends.convention import ConventionBackend
from sassyflow.pipeline.backends.gem import GemBackend
from sassyflow.pipeline.backends.native import NativeBackend
from sassyflow.pipeline.backends.probe import EnvironmentProbe, SystemEnvironmentProbe
from sassyflow.pipeline.backends.selector import BackendSelector

__all__ = [
    "CSS_ENCODING",
    "BaseBackend",
    "BackendSelector",
    "ConventionBackend",
    "EnvironmentProbe",
    "GemBackend",
    "NativeBackend",
    "SystemEnvironmentProbe",
]
