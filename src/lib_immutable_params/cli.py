"""CLI adapter for ``lib_immutable_params`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose locator-addressed reads and transforms over a structured document
(TOML/JSON/YAML) so operators can inspect or reshape payloads without writing
Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_get` – strict or fallback lookup printed as JSON.
* :func:`cli_check` – ``any``/``all`` existence check printed as ``true``/``false``.
* :func:`cli_cp` / :func:`cli_mv` / :func:`cli_rm` – transforms printing the
  resulting document as JSON.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer: it calls the composition root (:func:`read_params`) and the
facade, never the resolver or mutator directly. ``lib_cli_exit_tools`` owns
exit codes and traceback rendering so every command fails the same way.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import read_params
from .domain.errors import NotFoundError
from .domain.locator import parse
from .domain.params import Params, encode_json
from .observability import log_operation

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

MODE_CHOICES: Final[tuple[str, ...]] = ("any", "all")
_MISSING: Final[object] = object()

_DOCUMENT_ARGUMENT = click.argument(
    "document",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
)
_INDENT_OPTION = click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when metadata is missing."""

    try:
        return metadata.version("lib_immutable_params")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Locator-addressed access to immutable nested documents",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_immutable_params",
    message="lib_immutable_params version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_immutable_params")
    except metadata.PackageNotFoundError:
        click.echo("lib_immutable_params (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_immutable_params')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
@_DOCUMENT_ARGUMENT
@click.argument("locator")
@click.option(
    "--fallback",
    "fallbacks",
    multiple=True,
    help="Locator tried when the previous ones do not resolve (repeatable, in order)",
)
@click.option(
    "--default",
    "default_json",
    default=None,
    help="JSON value printed when no locator resolves; without it a miss is an error",
)
@_INDENT_OPTION
def cli_get(
    document: Path,
    locator: str,
    fallbacks: Sequence[str],
    default_json: Optional[str],
    indent: Optional[int],
) -> None:
    """Print the value at LOCATOR inside DOCUMENT as JSON.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> runner = CliRunner()
    >>> with runner.isolated_filesystem():
    ...     _ = Path("params.json").write_text('{"user": {"name": "Mikko"}}', encoding="utf-8")
    ...     result = runner.invoke(cli, ["get", "params.json", ":user:name"])
    >>> result.output.strip()
    '"Mikko"'
    """

    default = _parse_default(default_json)
    params = read_params(document)
    value = params.get_or_else(locator, _MISSING, fallbacks=fallbacks)
    if value is _MISSING:
        if default is _MISSING:
            raise NotFoundError(parse(locator))
        log_operation("default_used", "get", document=str(document), locator=locator)
        value = default
    click.echo(encode_json(value, indent=indent))


@cli.command("check", context_settings=CLICK_CONTEXT_SETTINGS)
@_DOCUMENT_ARGUMENT
@click.argument("locators", nargs=-1, required=True)
@click.option(
    "--mode",
    type=click.Choice(MODE_CHOICES, case_sensitive=False),
    default="all",
    show_default=True,
    help="Require every locator (all) or at least one (any) to resolve",
)
def cli_check(document: Path, locators: Sequence[str], mode: str) -> None:
    """Print ``true`` when the LOCATORS resolve inside DOCUMENT, else ``false``."""

    params = read_params(document)
    if mode.lower() == "any":
        outcome = params.any_defined(*locators)
    else:
        outcome = params.all_defined(*locators)
    click.echo(json.dumps(outcome))


@cli.command("cp", context_settings=CLICK_CONTEXT_SETTINGS)
@_DOCUMENT_ARGUMENT
@click.argument("source")
@click.argument("destination")
@_INDENT_OPTION
def cli_cp(document: Path, source: str, destination: str, indent: Optional[int]) -> None:
    """Copy SOURCE to DESTINATION and print the resulting document."""

    _emit_document(document, "cp", read_params(document).cp(source, destination), indent)


@cli.command("mv", context_settings=CLICK_CONTEXT_SETTINGS)
@_DOCUMENT_ARGUMENT
@click.argument("source")
@click.argument("destination")
@_INDENT_OPTION
def cli_mv(document: Path, source: str, destination: str, indent: Optional[int]) -> None:
    """Move SOURCE to DESTINATION and print the resulting document."""

    _emit_document(document, "mv", read_params(document).mv(source, destination), indent)


@cli.command("rm", context_settings=CLICK_CONTEXT_SETTINGS)
@_DOCUMENT_ARGUMENT
@click.argument("locator")
@_INDENT_OPTION
def cli_rm(document: Path, locator: str, indent: Optional[int]) -> None:
    """Remove LOCATOR and print the resulting document."""

    _emit_document(document, "rm", read_params(document).rm(locator), indent)


def _parse_default(default_json: Optional[str]) -> object:
    """Decode the ``--default`` option, returning :data:`_MISSING` when unset."""

    if default_json is None:
        return _MISSING
    try:
        return json.loads(default_json)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Not valid JSON: {exc}", param_hint="--default") from exc


def _emit_document(document: Path, operation: str, params: Params, indent: Optional[int]) -> None:
    log_operation("document_transformed", operation, document=str(document))
    click.echo(params.to_json(indent=indent))


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_immutable_params",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
