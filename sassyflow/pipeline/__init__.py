"""
Save-triggered build pipeline.

Save Event Router -> Build Orchestrator -> Backend Selector -> Compiler
Backend -> Minifier -> Output Registrar.
"""

from sassyflow.pipeline.backends import (
    BackendSelector,
    BaseBackend,
    ConventionBackend,
    EnvironmentProbe,
    GemBackend,
    NativeBackend,
    SystemEnvironmentProbe,
)
from sassyflow.pipeline.minifier import CssMinifier, compress
from sassyflow.pipeline.orchestrator import BuildOrchestrator, write_error_comment
from sassyflow.pipeline.project import (
    DirectoryProjectGraph,
    ManifestRegistrar,
    OutputRegistrar,
    ProjectGraph,
)
from sassyflow.pipeline.router import SaveEventRouter
from sassyflow.pipeline.supervisor import BuildSupervisor

__all__ = [
    "BackendSelector",
    "BaseBackend",
    "BuildOrchestrator",
    "BuildSupervisor",
    "ConventionBackend",
    "CssMinifier",
    "DirectoryProjectGraph",
    "EnvironmentProbe",
    "GemBackend",
    "ManifestRegistrar",
    "NativeBackend",
    "OutputRegistrar",
    "ProjectGraph",
    "SaveEventRouter",
    "SystemEnvironmentProbe",
    "compress",
    "write_error_comment",
]
