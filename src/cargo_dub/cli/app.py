"""CLI application entry point and command routing for cargo-dub.

This module is the **sole error boundary** for the entire application.
It catches :class:`~cargo_dub.exceptions.CargoDubError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering a one-line ``Error:`` message
and returning well-defined exit codes.

Architecture notes
------------------
* No translation logic lives here — argparse output is turned into a
  typed request and handed to :class:`~cargo_dub.core.dub_service.DubService`.
* The ``dub`` executable is resolved exactly once, after parsing and
  before any subcommand logic runs.
* When ``dub`` runs, its exit code becomes this process's exit code
  unchanged.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from cargo_dub.cli import exit_codes
from cargo_dub.cli.console import configure_logging, console
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
    RunRequest,
    SubcommandRequest,
)
from cargo_dub.exceptions import CargoDubError
from cargo_dub.version import __version__

PLUGIN_SUBCOMMAND: str = "dub"
"""First argument a host build tool passes when running us as a plugin."""

_GLOBAL_FLAGS: frozenset[str] = frozenset({"-v", "--verbose"})


@dataclass(frozen=True, slots=True)
class ParsedArgs:
    """Outcome of command-line parsing.

    ``request`` is ``None`` only when ``doctor`` was requested.
    """

    request: SubcommandRequest | None
    verbose: bool = False
    doctor: bool = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _comma_list(value: str) -> list[str]:
    return value.split(",")


def _add_option_set_arguments(
    parser: argparse.ArgumentParser,
    *,
    non_interactive: bool = True,
) -> None:
    """Register the build options shared by most subcommands."""
    group = parser.add_argument_group("dub options")
    group.add_argument("--compiler", help="D compiler to use (default: $DC).")
    group.add_argument("-b", "--build", help="Build type (debug, release, …).")
    group.add_argument("-c", "--config", help="Build configuration.")
    group.add_argument("-a", "--arch", help="Target architecture.")
    group.add_argument("--rdmd", action="store_true", help="Use rdmd.")
    group.add_argument("--temp-build", action="store_true", help="Build in a temporary directory.")
    group.add_argument("-f", "--force", action="store_true", help="Force a rebuild.")
    group.add_argument("--nodeps", action="store_true", help="Skip dependency resolution.")
    group.add_argument("--deep", action="store_true", help="Build all dependencies.")
    group.add_argument(
        "--d-version",
        dest="d_versions",
        action="append",
        metavar="VERSION",
        help="Define a D version identifier (repeatable).",
    )
    group.add_argument(
        "-d",
        "--debug",
        action="append",
        metavar="IDENT",
        help="Define a debug identifier (repeatable).",
    )
    group.add_argument(
        "--override-config",
        action="append",
        metavar="PACKAGE/CONFIG",
        help="Override a dependency's configuration (repeatable).",
    )
    group.add_argument("--yes", action="store_true", help="Answer yes to all prompts.")
    if non_interactive:
        group.add_argument(
            "--non-interactive",
            action="store_true",
            help="Do not prompt for input.",
        )


def _options_from_args(
    args: argparse.Namespace,
    *,
    non_interactive: bool = True,
) -> OptionSet:
    """Collect the shared options from *args*.

    *non_interactive* is ``False`` for subcommands that own
    ``--non-interactive`` themselves (``init``).
    """
    return OptionSet(
        compiler=args.compiler,
        build=args.build,
        config=args.config,
        arch=args.arch,
        rdmd=args.rdmd,
        temp_build=args.temp_build,
        force=args.force,
        deep=args.deep,
        nodeps=args.nodeps,
        yes=args.yes,
        non_interactive=args.non_interactive if non_interactive else False,
        d_versions=tuple(args.d_versions or ()),
        debug=tuple(args.debug or ()),
        override_config=tuple(args.override_config or ()),
    )


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    ``cargo-dub <command>`` and the host plugin form
    ``cargo-dub dub <command>`` are equivalent; the plugin prefix is
    stripped before parsing.
    """
    parser = argparse.ArgumentParser(
        prog="cargo-dub",
        description="Run the DUB build tool through a stable command surface.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log resolution and the dispatched dub command to stderr.",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    for name, alias, help_text in (
        ("run", "r", "Build and run package"),
        ("build", "b", "Build package"),
    ):
        cmd = sub.add_parser(name, aliases=[alias], help=help_text)
        _add_option_set_arguments(cmd)
        cmd.set_defaults(command=name)

    cmd = sub.add_parser("convert", help="Convert dub.json/dub.sdl")
    cmd.add_argument(
        "-f",
        "--format",
        required=True,
        choices=[fmt.value for fmt in ManifestFormat],
        help="Target manifest format.",
    )

    cmd = sub.add_parser("raw", help="Pass raw arguments to dub")
    cmd.add_argument("args", nargs=argparse.REMAINDER, help="Arguments for dub.")

    cmd = sub.add_parser(
        "describe",
        help="Print JSON build description for package and dependencies",
    )
    cmd.add_argument(
        "--data",
        type=_comma_list,
        action="extend",
        help="Comma-separated list of data fields to print.",
    )
    cmd.add_argument("--data-list", action="store_true", help="Print data as a list.")
    _add_option_set_arguments(cmd)

    for name, help_text in (
        ("add", "Add packages as dependencies"),
        ("remove", "Remove packages from dependencies"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("packages", nargs="+", metavar="PACKAGE[@VERSION]")
        _add_option_set_arguments(cmd)

    cmd = sub.add_parser("fetch", help="Fetch packages to a shared location")
    cmd.add_argument("package", metavar="PACKAGE[@VERSION]")
    cmd.add_argument("--cache", help="Cache location (local, system, user).")
    _add_option_set_arguments(cmd)

    cmd = sub.add_parser("init", help="Initialize an empty package")
    cmd.add_argument("directory", nargs="?", metavar="DIRECTORY")
    cmd.add_argument("dependencies", nargs="*", metavar="DEPENDENCY")
    cmd.add_argument(
        "-t",
        "--type",
        default=ProjectType.MINIMAL.cli_name,
        choices=[kind.cli_name for kind in ProjectType],
        help="Package template (default: minimal).",
    )
    cmd.add_argument("--non-interactive", action="store_true", help="Do not prompt for input.")
    _add_option_set_arguments(cmd, non_interactive=False)

    cmd = sub.add_parser("clean", help="Remove cached build files")
    cmd.add_argument("package", nargs="?", metavar="PACKAGE")
    cmd.add_argument("--all-packages", action="store_true", help="Clean all known packages.")
    _add_option_set_arguments(cmd)

    cmd = sub.add_parser("lint", help="Run D-Scanner linter tests")
    cmd.add_argument("package", nargs="?", metavar="PACKAGE[@VERSION]")
    cmd.add_argument("--syntax-check", action="store_true")
    cmd.add_argument("--style-check", action="store_true")
    cmd.add_argument("--error-format")
    cmd.add_argument("--report", action="store_true")
    cmd.add_argument("--report-format")
    cmd.add_argument("--report-file")
    cmd.add_argument("--import-paths", action="append", metavar="PATH")
    cmd.add_argument("--dscanner-config")
    _add_option_set_arguments(cmd)

    sub.add_parser("doctor", help="Check that dub and the environment are usable")

    return parser


# ---------------------------------------------------------------------------
# Request construction
# ---------------------------------------------------------------------------

def _request_from_args(args: argparse.Namespace) -> SubcommandRequest:
    """Turn a parsed namespace into the matching typed request."""
    command: str | None = args.command
    if command is None:
        return RunRequest()
    if command == "run":
        return RunRequest(options=_options_from_args(args))
    if command == "build":
        return BuildRequest(options=_options_from_args(args))
    if command == "convert":
        return ConvertRequest(format=ManifestFormat(args.format))
    if command == "raw":
        return RawRequest(args=tuple(args.args))
    if command == "describe":
        return DescribeRequest(
            data=tuple(args.data) if args.data is not None else None,
            data_list=args.data_list,
            options=_options_from_args(args),
        )
    if command == "add":
        return AddRequest(packages=tuple(args.packages), options=_options_from_args(args))
    if command == "remove":
        return RemoveRequest(packages=tuple(args.packages), options=_options_from_args(args))
    if command == "fetch":
        return FetchRequest(
            package=args.package,
            cache=args.cache,
            options=_options_from_args(args),
        )
    if command == "init":
        return InitRequest(
            directory=args.directory,
            dependencies=tuple(args.dependencies),
            type=ProjectType.from_cli(args.type),
            non_interactive=args.non_interactive,
            options=_options_from_args(args, non_interactive=False),
        )
    if command == "clean":
        return CleanRequest(
            package=args.package,
            all_packages=args.all_packages,
            options=_options_from_args(args),
        )
    if command == "lint":
        return LintRequest(
            package=args.package,
            syntax_check=args.syntax_check,
            style_check=args.style_check,
            error_format=args.error_format,
            report=args.report,
            report_format=args.report_format,
            report_file=args.report_file,
            import_paths=tuple(args.import_paths) if args.import_paths is not None else None,
            dscanner_config=args.dscanner_config,
            options=_options_from_args(args),
        )
    raise ValueError(f"unknown command: {command}")


def _split_raw(argv: list[str]) -> tuple[list[str], list[str]] | None:
    """Split ``[global flags..., "raw", tokens...]`` into its two halves.

    argparse cannot reliably hand a ``-``-prefixed first token to a
    REMAINDER positional, so raw tokens are taken before parsing.
    """
    for index, token in enumerate(argv):
        if token == "raw":
            return argv[: index + 1], argv[index + 1 :]
        if token not in _GLOBAL_FLAGS:
            return None
    return None


def parse_args(argv: Sequence[str] | None = None) -> ParsedArgs:
    """Parse *argv* (default: ``sys.argv[1:]``) into a :class:`ParsedArgs`."""
    tokens = list(sys.argv[1:] if argv is None else argv)
    if tokens and tokens[0] == PLUGIN_SUBCOMMAND:
        tokens = tokens[1:]

    parser = _build_parser()

    raw_split = _split_raw(tokens)
    if raw_split is not None:
        head, raw_tokens = raw_split
        args = parser.parse_args(head)
        return ParsedArgs(request=RawRequest(args=tuple(raw_tokens)), verbose=args.verbose)

    args = parser.parse_args(tokens)
    if args.command == "doctor":
        return ParsedArgs(request=None, verbose=args.verbose, doctor=True)
    return ParsedArgs(request=_request_from_args(args), verbose=args.verbose)


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_request(request: SubcommandRequest) -> int:
    """Resolve ``dub`` once, then translate and run *request*."""
    from cargo_dub.core.dub_service import DubService
    from cargo_dub.infra.dub_locator import resolve_dub
    from cargo_dub.infra.process_runner import SubprocessRunner
    from cargo_dub.infra.workspace import LocalWorkspace

    executable = resolve_dub()
    service = DubService(executable, SubprocessRunner(), LocalWorkspace())
    return service.execute(request)


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from cargo_dub.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the cargo-dub CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code — ``dub``'s own code when it ran.
    """
    parsed = parse_args(argv)
    configure_logging(parsed.verbose)

    if parsed.doctor or parsed.request is None:
        return _handle_doctor()

    return _handle_request(parsed.request)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.  Nothing is
    retried.
    """
    try:
        code = main()
        sys.exit(code)
    except CargoDubError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}", plain=f"Error: {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}", plain=f"Hint: {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]", plain="\nAborted by user.")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}",
            plain=f"Unexpected error. Please report this issue.\n  {type(exc).__name__}: {exc}",
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
