"""Core / service layer — request model, argument encoding, orchestration.

Rules
-----
* No ``print()`` calls.
* No subprocess or filesystem I/O — both arrive through protocols.
* No imports from ``cli`` or ``infra``.
* Encoding is fully typed and deterministic.
"""

from cargo_dub.core.dub_service import DubService
from cargo_dub.core.encoder import encode, encode_options
from cargo_dub.core.models import (
    AddRequest,
    BuildRequest,
    CleanRequest,
    ConvertRequest,
    DescribeRequest,
    FetchRequest,
    InitRequest,
    LintRequest,
    ManifestFormat,
    OptionSet,
    ProjectType,
    RawRequest,
    RemoveRequest,
    ResolvedExecutable,
    RunRequest,
    SubcommandRequest,
    ToolInvocation,
)
from cargo_dub.core.protocols import ProcessRunner, Workspace

__all__: list[str] = [
    "AddRequest",
    "BuildRequest",
    "CleanRequest",
    "ConvertRequest",
    "DescribeRequest",
    "DubService",
    "FetchRequest",
    "InitRequest",
    "LintRequest",
    "ManifestFormat",
    "OptionSet",
    "ProcessRunner",
    "ProjectType",
    "RawRequest",
    "RemoveRequest",
    "ResolvedExecutable",
    "RunRequest",
    "SubcommandRequest",
    "ToolInvocation",
    "Workspace",
    "encode",
    "encode_options",
]
