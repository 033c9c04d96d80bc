"""
Domain models — Pydantic types for epos-opensource.

All models are re-exported here for convenient access:

    from epos_opensource.core.models import ContainerEnvironment, ClusterEnvironment, Config
"""

from epos_opensource.core.models.config import Config, FilePickerMode, TUIConfig
from epos_opensource.core.models.environment import ClusterEnvironment, ContainerEnvironment

__all__ = [
    # environment.py
    "ClusterEnvironment",
    "ContainerEnvironment",
    # config.py
    "Config",
    "FilePickerMode",
    "TUIConfig",
]
