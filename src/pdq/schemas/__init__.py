"""
Tool input/output schemas and validation helpers.
"""

from pdq.schemas.inputs import (
    ListUsersAndTeamsInput,
    ListWorkspacesInput,
    SearchInput,
)
from pdq.schemas.outputs import (
    DirectoryToolOutput,
    ErrorEnvelope,
    ErrorInfo,
    ResolutionInfo,
    SuccessEnvelope,
)
from pdq.schemas.validation import get_json_schema, validate_input

__all__ = [
    "ListUsersAndTeamsInput",
    "ListWorkspacesInput",
    "SearchInput",
    "DirectoryToolOutput",
    "ErrorEnvelope",
    "ErrorInfo",
    "ResolutionInfo",
    "SuccessEnvelope",
    "get_json_schema",
    "validate_input",
]
