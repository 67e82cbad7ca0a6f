"""Domain models for cargo-dub.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and zero dependencies
on external packages.

A user invocation is represented by exactly one *request* variant (see
:data:`SubcommandRequest`).  Each variant carries only the fields its
DUB subcommand understands plus, where applicable, an embedded
:class:`OptionSet`.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ManifestFormat(Enum):
    """Target format of ``dub convert``."""

    JSON = "json"
    SDL = "sdl"

    @property
    def source_manifest(self) -> str:
        """Manifest that must already exist to convert *into* this format."""
        return "dub.sdl" if self is ManifestFormat.JSON else "dub.json"


class ProjectType(Enum):
    """Package template used by ``dub init``.

    The value is the token DUB expects; :attr:`cli_name` is the spelling
    accepted on the command line.
    """

    MINIMAL = "minimal"
    VIBE_D = "vibe.d"
    DEIMOS = "deimos"
    CUSTOM = "custom"

    @property
    def cli_name(self) -> str:
        return self.value.replace(".", "-")

    @classmethod
    def from_cli(cls, name: str) -> ProjectType:
        """Look up a member by CLI spelling (``vibe-d``) or DUB token (``vibe.d``)."""
        for member in cls:
            if name in (member.cli_name, member.value):
                return member
        raise ValueError(f"invalid project type: {name!r}")


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OptionSet:
    """Build options shared by every subcommand that forwards them.

    Field declaration order inside each group is the order in which the
    encoder emits flags.
    """

    compiler: str | None = None
    """``--compiler=``; falls back to ``$DC`` when unset."""

    build: str | None = None
    """``--build=`` build type (``debug``, ``release``, …)."""

    config: str | None = None
    """``--config=`` build configuration name."""

    arch: str | None = None
    """``--arch=`` target architecture."""

    rdmd: bool = False
    temp_build: bool = False
    force: bool = False
    deep: bool = False
    nodeps: bool = False
    yes: bool = False
    non_interactive: bool = False

    d_versions: tuple[str, ...] = ()
    """One ``--d-version=`` per entry, in order."""

    debug: tuple[str, ...] = ()
    """One ``--debug=`` per entry, in order."""

    override_config: tuple[str, ...] = ()
    """One ``--override-config=`` per entry, in order."""


# ---------------------------------------------------------------------------
# Request variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RunRequest:
    """Build and run the package in the working directory."""

    subcommand: ClassVar[str] = "run"
    options: OptionSet = field(default_factory=OptionSet)


@dataclass(frozen=True, slots=True)
class BuildRequest:
    """Build the package in the working directory."""

    subcommand: ClassVar[str] = "build"
    options: OptionSet = field(default_factory=OptionSet)


@dataclass(frozen=True, slots=True)
class ConvertRequest:
    """Convert the package manifest between JSON and SDL."""

    subcommand: ClassVar[str] = "convert"
    format: ManifestFormat


@dataclass(frozen=True, slots=True)
class RawRequest:
    """Forward *args* to ``dub`` untouched."""

    subcommand: ClassVar[str] = "raw"
    args: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DescribeRequest:
    subcommand: ClassVar[str] = "describe"
    data: tuple[str, ...] | None = None
    data_list: bool = False
    options: OptionSet = field(default_factory=OptionSet)


@dataclass(frozen=True, slots=True)
class AddRequest:
    subcommand: ClassVar[str] = "add"
    packages: tuple[str, ...]
    options: OptionSet = field(default_factory=OptionSet)


@dataclass(frozen=True, slots=True)
class RemoveRequest:
    subcommand: ClassVar[str] = "remove"
    packages: tuple[str, ...]
    options: OptionSet = field(default_factory=OptionSet)


@dataclass(frozen=True, slots=True)
class FetchRequest:
    subcommand: ClassVar[str] = "fetch"
    package: str
    cache: str | None = None
    options: OptionSet = field(default_factory=OptionSet)


@dataclass(frozen=True, slots=True)
class InitRequest:
    subcommand: ClassVar[str] = "init"
    directory: str | None = None
    dependencies: tuple[str, ...] = ()
    type: ProjectType = ProjectType.MINIMAL
    non_interactive: bool = False
    options: OptionSet = field(default_factory=OptionSet)


@dataclass(frozen=True, slots=True)
class CleanRequest:
    subcommand: ClassVar[str] = "clean"
    package: str | None = None
    all_packages: bool = False
    options: OptionSet = field(default_factory=OptionSet)


@dataclass(frozen=True, slots=True)
class LintRequest:
    """Run D-Scanner through ``dub lint``."""

    subcommand: ClassVar[str] = "lint"
    package: str | None = None
    syntax_check: bool = False
    style_check: bool = False
    error_format: str | None = None
    report: bool = False
    report_format: str | None = None
    report_file: str | None = None
    import_paths: tuple[str, ...] | None = None
    dscanner_config: str | None = None
    options: OptionSet = field(default_factory=OptionSet)


SubcommandRequest = Union[
    RunRequest,
    BuildRequest,
    ConvertRequest,
    RawRequest,
    DescribeRequest,
    AddRequest,
    RemoveRequest,
    FetchRequest,
    InitRequest,
    CleanRequest,
    LintRequest,
]
"""Tagged union of every supported operation."""


# ---------------------------------------------------------------------------
# Resolved executable
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ResolvedExecutable:
    """A ``dub`` executable that answered the liveness probe.

    Resolved once per process run and shared read-only afterwards.
    """

    path: str
    """Name or path passed to the OS when spawning ``dub``."""

    candidates: tuple[str, ...]
    """Platform-ordered candidate names that were considered."""


# ---------------------------------------------------------------------------
# Encoded invocation
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolInvocation:
    """Immutable, ordered argument list handed to the ``dub`` child process.

    The tuple guarantees immutability.  Convenience dunder methods make
    the invocation usable in iteration and length contexts.
    """

    tokens: tuple[str, ...]

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def command_line(self, executable: str) -> list[str]:
        """Return the full argv: *executable* followed by every token."""
        return [executable, *self.tokens]
