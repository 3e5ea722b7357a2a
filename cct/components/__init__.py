"""Component kinds, requests and path resolution."""

from cct.components.resolver import (
    ResolvedComponent,
    SourceRepository,
    local_path_for,
    remote_url_for,
    resolve,
)
from cct.components.types import (
    KIND_CONFIGS,
    ComponentKind,
    ComponentRequest,
    InstallResult,
    KindConfig,
)

__all__ = [
    # Types and configs
    "ComponentKind",
    "KindConfig",
    "KIND_CONFIGS",
    "ComponentRequest",
    "InstallResult",
    # Resolution
    "SourceRepository",
    "ResolvedComponent",
    "local_path_for",
    "remote_url_for",
    "resolve",
]
