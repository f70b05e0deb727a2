"""
PDQ - platform directory queries

Adaptive query resolution for users, teams, workspaces, boards, docs and
folders, served as MCP tools.
"""

__version__ = "0.1.0"
__author__ = "PDQ Contributors"

from pdq.config import ApiConfig, Config, LimitsConfig, load_config
from pdq.core import (
    CeilingExceededError,
    ConfigurationError,
    EmptySearchTermError,
    ParameterConflictError,
    PDQError,
    RemoteFailureError,
)

__all__ = [
    "__version__",
    "__author__",
    "ApiConfig",
    "Config",
    "LimitsConfig",
    "load_config",
    "PDQError",
    "ConfigurationError",
    "ParameterConflictError",
    "CeilingExceededError",
    "EmptySearchTermError",
    "RemoteFailureError",
]
