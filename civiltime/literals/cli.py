"""Root CLI group for civiltime-literals."""

from __future__ import annotations

from pathlib import Path

import click
import libcst as cst
import structlog

from civiltime import __version__
from civiltime.literals.logging import configure_logging
from civiltime.literals.settings import LiteralSettings
from civiltime.literals.transform import TransformResult, collect_files, transform_source

_paths_argument = click.argument(
    "paths",
    nargs=-1,
    type=click.Path(exists=True, path_type=Path),
)


def _process(settings: LiteralSettings, paths: tuple[Path, ...], *, rewrite: bool) -> list[TransformResult] | None:
    """Run the transformer over every file under ``paths``.

    Returns None if any file could not be read or parsed, after reporting
    it.
    """
    log = structlog.get_logger("civiltime.literals")
    files = collect_files(paths or (Path.cwd(),), settings.exclude)
    log.debug("collected files", count=len(files))

    results: list[TransformResult] = []
    failed = False
    for path in files:
        try:
            source = path.read_text(encoding="utf-8")
            result = transform_source(
                source,
                str(path),
                marker_module=settings.marker_module,
                runtime_module=settings.runtime_module,
                rewrite=rewrite,
            )
        except (OSError, UnicodeDecodeError, cst.ParserSyntaxError) as exc:
            log.warning("unreadable source", path=str(path), error=str(exc))
            click.echo(f"{path}: cannot process: {exc}", err=True)
            failed = True
            continue
        results.append(result)
    return None if failed else results


def _report(results: list[TransformResult]) -> int:
    count = 0
    for result in results:
        for diagnostic in result.diagnostics:
            click.echo(str(diagnostic), err=True)
            count += 1
    return count


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="civiltime-literals")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Read settings from this pyproject.toml.")
@click.option("--marker-module", default=None, help="Module whose helper calls are literals.")
@click.option("--runtime-module", default=None, help="Module expanded code constructs through.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    marker_module: str | None,
    runtime_module: str | None,
) -> None:
    """civiltime-literals: validate and expand date/time literals."""
    settings = LiteralSettings.from_cli(
        config_path=config_path,
        verbose=verbose or None,
        log_json=log_json or None,
        marker_module=marker_module,
        runtime_module=runtime_module,
    )
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@_paths_argument
@click.pass_obj
def check(settings: LiteralSettings, paths: tuple[Path, ...]) -> None:
    """Report every invalid literal under PATHS (default: cwd)."""
    results = _process(settings, paths, rewrite=False)
    if results is None:
        raise SystemExit(1)

    count = _report(results)
    if count:
        click.echo(f"Found {count} invalid literal(s).", err=True)
        raise SystemExit(1)
    click.echo(f"Checked {len(results)} file(s), all literals valid.")


@cli.command()
@_paths_argument
@click.option("--write", is_flag=True, help="Rewrite the files in place instead of printing.")
@click.pass_obj
def expand(settings: LiteralSettings, paths: tuple[Path, ...], write: bool) -> None:
    """Expand literals under PATHS into constructor calls.

    Nothing is written when any literal is invalid.
    """
    log = structlog.get_logger("civiltime.literals")
    results = _process(settings, paths, rewrite=True)
    if results is None:
        raise SystemExit(1)

    if _report(results):
        raise click.ClickException("invalid literals found, nothing expanded")

    for result in results:
        if not result.changed:
            continue
        log.info("expanded literals", path=result.path, count=result.expanded)
        if write:
            Path(result.path).write_text(result.code, encoding="utf-8")
            click.echo(f"Expanded {result.expanded} literal(s) in {result.path}")
        else:
            click.echo(f"# {result.path}")
            click.echo(result.code, nl=False)
