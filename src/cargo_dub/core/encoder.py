"""Pure argument encoding — typed requests to DUB token sequences.

Every function in this module is a **pure** transformation of its
inputs.  The only ambient input is the ``DC`` environment variable,
which is read through an injectable mapping so tests stay deterministic.

Option encoding order (enforced by :func:`encode_options`):

1. **Scalars** — compiler, build, config, arch.
2. **Switches** — rdmd, temp-build, force, deep, nodeps, yes,
   non-interactive.
3. **Lists** — d-version, debug, override-config; one token per entry.

Subcommand-specific positionals and flags always precede the option
encoding.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from cargo_dub.core.models import (
    AddRequest,
    BuildRequest,
    CleanRequest,
    ConvertRequest,
    DescribeRequest,
    FetchRequest,
    InitRequest,
    LintRequest,
    OptionSet,
    RawRequest,
    RemoveRequest,
    RunRequest,
    SubcommandRequest,
    ToolInvocation,
)

COMPILER_ENV_VAR: str = "DC"
"""Environment variable consulted when ``--compiler`` is not given."""


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------

def _default_compiler(environ: Mapping[str, str] | None) -> str | None:
    env = os.environ if environ is None else environ
    return env.get(COMPILER_ENV_VAR)


def encode_options(
    options: OptionSet,
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """Encode *options* into DUB flag tokens.

    An explicit ``compiler`` always wins over ``$DC``; the variable is
    only consulted when the field is ``None``.
    """
    tokens: list[str] = []

    compiler = options.compiler
    if compiler is None:
        compiler = _default_compiler(environ)

    for name, value in (
        ("compiler", compiler),
        ("build", options.build),
        ("config", options.config),
        ("arch", options.arch),
    ):
        if value is not None:
            tokens.append(f"--{name}={value}")

    for flag, enabled in (
        ("--rdmd", options.rdmd),
        ("--temp-build", options.temp_build),
        ("--force", options.force),
        ("--deep", options.deep),
        ("--nodeps", options.nodeps),
        ("--yes", options.yes),
        ("--non-interactive", options.non_interactive),
    ):
        if enabled:
            tokens.append(flag)

    tokens.extend(f"--d-version={version}" for version in options.d_versions)
    tokens.extend(f"--debug={ident}" for ident in options.debug)
    tokens.extend(f"--override-config={cfg}" for cfg in options.override_config)
    return tokens


# ---------------------------------------------------------------------------
# Per-subcommand encoders
# ---------------------------------------------------------------------------

def _encode_convert(request: ConvertRequest) -> list[str]:
    return [request.subcommand, f"--format={request.format.value}"]


def _encode_describe(request: DescribeRequest) -> list[str]:
    tokens = [request.subcommand]
    if request.data is not None:
        tokens.extend(f"--data={item}" for item in request.data)
    if request.data_list:
        tokens.append("--data-list")
    return tokens


def _encode_fetch(request: FetchRequest) -> list[str]:
    tokens = [request.subcommand, request.package]
    if request.cache is not None:
        tokens.append(f"--cache={request.cache}")
    return tokens


def _encode_init(request: InitRequest) -> list[str]:
    tokens = [request.subcommand]
    if request.directory is not None:
        tokens.append(request.directory)
    tokens.extend(request.dependencies)
    tokens.append(f"--type={request.type.value}")
    if request.non_interactive:
        tokens.append("--non-interactive")
    return tokens


def _encode_clean(request: CleanRequest) -> list[str]:
    tokens = [request.subcommand]
    if request.package is not None:
        tokens.append(request.package)
    if request.all_packages:
        tokens.append("--all-packages")
    return tokens


def _encode_lint(request: LintRequest) -> list[str]:
    tokens = [request.subcommand]
    if request.package is not None:
        tokens.append(request.package)
    if request.syntax_check:
        tokens.append("--syntax-check")
    if request.style_check:
        tokens.append("--style-check")
    if request.error_format is not None:
        tokens.append(f"--error-format={request.error_format}")
    if request.report:
        tokens.append("--report")
    if request.report_format is not None:
        tokens.append(f"--report-format={request.report_format}")
    if request.report_file is not None:
        tokens.append(f"--report-file={request.report_file}")
    if request.import_paths is not None:
        tokens.extend(f"--import-paths={path}" for path in request.import_paths)
    if request.dscanner_config is not None:
        tokens.append(f"--dscanner-config={request.dscanner_config}")
    return tokens


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def encode(
    request: SubcommandRequest,
    environ: Mapping[str, str] | None = None,
) -> ToolInvocation:
    """Translate *request* into the exact tokens passed to ``dub``.

    ``raw`` requests bypass encoding and are forwarded verbatim;
    ``convert`` carries no :class:`OptionSet`.  Every other variant is
    its own head tokens followed by :func:`encode_options`.
    """
    if isinstance(request, RawRequest):
        return ToolInvocation(tokens=tuple(request.args))
    if isinstance(request, ConvertRequest):
        return ToolInvocation(tokens=tuple(_encode_convert(request)))

    if isinstance(request, (RunRequest, BuildRequest)):
        head = [request.subcommand]
    elif isinstance(request, (AddRequest, RemoveRequest)):
        head = [request.subcommand, *request.packages]
    elif isinstance(request, DescribeRequest):
        head = _encode_describe(request)
    elif isinstance(request, FetchRequest):
        head = _encode_fetch(request)
    elif isinstance(request, InitRequest):
        head = _encode_init(request)
    elif isinstance(request, CleanRequest):
        head = _encode_clean(request)
    elif isinstance(request, LintRequest):
        head = _encode_lint(request)
    else:
        raise TypeError(f"unsupported request type: {type(request).__name__}")

    return ToolInvocation(tokens=(*head, *encode_options(request.options, environ)))
