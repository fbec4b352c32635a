"""CLI entrypoints for tersite build tooling."""

import logging
import shutil
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from .config import Config, load_config
from .errors import ConfigError, FrontMatterError, TersiteError
from .output import OutputFile
from .pipeline import BuildResult, build_site, check_output_directory, reset_output_directory
from .reporting import write_report
from .scaffold import ScaffoldResult, init_project, missing_views

console = Console()
app = typer.Typer(help="tersite static site generator.")

ConfigPathOption = Annotated[
    str,
    typer.Option("--config", "-c", help="Path to configuration file or project directory."),
]
QuietFlag = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Only print the build summary."),
]
VerboseFlag = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show debug logging."),
]


@app.command()
def init(
    project: Annotated[
        Path,
        typer.Argument(help="Project directory to initialize."),
    ] = Path("."),
) -> None:
    """Create the default config, views and assets where they are missing."""
    project.mkdir(parents=True, exist_ok=True)
    try:
        _, result = init_project(project)
    except (ConfigError, OSError) as exc:
        console.print(f"[bold red]Cannot initialize[/]: {exc}")
        raise typer.Exit(code=1) from exc
    _print_scaffold_summary(result)


@app.command()
def build(
    config_path: ConfigPathOption = ".",
    input_dir: Annotated[
        str | None,
        typer.Option("--input", "-i", help="Override the content directory."),
    ] = None,
    output_dir: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Override the output directory."),
    ] = None,
    drafts: Annotated[
        bool,
        typer.Option("--drafts", help="Render pages marked with an ignore key."),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with an error when any page fails to render."),
    ] = False,
    report_path: Annotated[
        str | None,
        typer.Option("--report", "-r", help="Optional path to write a JSON build report."),
    ] = None,
    quiet: QuietFlag = False,
    verbose: VerboseFlag = False,
) -> None:
    """Run a full rebuild of the site."""
    _configure_logging(verbose)
    config: Config = _load(config_path)
    if input_dir:
        config.content_dir = Path(input_dir).resolve()
    if output_dir:
        config.output_dir = Path(output_dir).resolve()
    if drafts:
        config.render_drafts = True

    missing = missing_views(config)
    if missing:
        console.print(f"[bold red]Views missing[/]: {', '.join(_display_path(path) for path in missing)}")
        console.print("Run 'tersite init' to create the default views.")
        raise typer.Exit(code=1)

    try:
        reset_output_directory(config)
        result = build_site(
            config,
            on_write=None if quiet else _announce("write"),
            on_copy=None if quiet else _announce("copy"),
        )
    except FrontMatterError as exc:
        console.print(f"[bold red]Invalid document[/]: {exc}")
        raise typer.Exit(code=1) from exc
    except (TersiteError, ValueError) as exc:
        console.print(f"[bold red]Build failed[/]: {exc}")
        raise typer.Exit(code=1) from exc

    _print_build_summary(result, config)
    if report_path:
        target = write_report(result.report, Path(report_path))
        console.print(f"[bold green]Report[/]: {_display_path(target)}")

    if strict and result.report.has_failures:
        raise typer.Exit(code=1)


@app.command()
def clean(config_path: ConfigPathOption = ".") -> None:
    """Remove the generated site directory."""
    config: Config = _load(config_path)
    try:
        output = check_output_directory(config)
    except ConfigError as exc:
        console.print(f"[bold red]Refusing to clean[/]: {exc}")
        raise typer.Exit(code=1) from exc
    if output.exists():
        console.print(f"[bold green]Removing[/]: site output ({_display_path(output)})")
        shutil.rmtree(output, ignore_errors=True)
    else:
        console.print(f"[bold yellow]Skipping[/]: site output ({_display_path(output)}) not found")


def _announce(verb: str):
    def _print(file: OutputFile) -> None:
        console.print(f"{verb}\t{_display_path(file.file_path)}", highlight=False)

    return _print


def _print_build_summary(result: BuildResult, config: Config) -> None:
    report = result.report
    console.print(
        "[bold green]Pages[/]: "
        f"{report.pages} loaded ({report.drafts_skipped} draft(s) skipped), "
        f"{report.tags} tag(s)"
    )
    console.print(
        "[bold green]Output[/]: "
        f"wrote {report.files_written} file(s) and copied {report.assets_copied} asset(s) to "
        f"{_display_path(config.output_dir)} in {report.duration_seconds:.2f}s"
    )
    renders = report.renders
    if renders.skipped or renders.failed:
        console.print(
            "[bold yellow]Renders[/]: "
            f"{renders.produced} produced, {renders.skipped} skipped, {renders.failed} failed"
        )
    if report.warnings:
        console.print("[bold yellow]Warnings:[/]")
        for warning in report.warnings:
            console.print(f"- {warning}")


def _print_scaffold_summary(result: ScaffoldResult) -> None:
    console.print("[bold green]Project initialized[/]")
    for path in result.created:
        console.print(f"- {_display_path(path)} (new)")
    for path in result.skipped:
        console.print(f"- {_display_path(path)} (exists, skipped)")


def _display_path(path: Path) -> str:
    try:
        return path.relative_to(Path.cwd()).as_posix()
    except ValueError:
        return path.as_posix()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load(path: str) -> Config:
    try:
        return load_config(path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Config file not found: {path}") from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


if __name__ == "__main__":
    app()
