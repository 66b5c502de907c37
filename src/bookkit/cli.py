from __future__ import annotations
import json
import logging
import pathlib
from typing import List, Optional
import typer
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from .builder import BookBuilder
from .config import load_config
from .errors import BookError
from .page.app import enhance_html

app = typer.Typer(add_completion=False)
err_console = Console(stderr=True)

ConfigOpt = typer.Option(None, "-c", "--config", help="Build configuration (default: <root>/book-config.json)")
RootOpt = typer.Option(".", "-r", "--root", help="Project root holding docs/ and src/")

def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )

def _fail(exc: Exception) -> None:
    err_console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(code=1)

@app.command()
def build(
    config: Optional[str] = ConfigOpt,
    root: str = RootOpt,
    verbose: bool = typer.Option(False, "-v", "--verbose"),
):
    _setup_logging(verbose)
    rprint("Building book...")
    try:
        cfg = load_config(config, root)
        report = BookBuilder(cfg, root).build()
    except (BookError, OSError) as exc:
        _fail(exc)
    rprint(f"[green]Build complete![/green] {report.file_count} files in {report.output_directory}")

@app.command()
def check(config: Optional[str] = ConfigOpt, root: str = RootOpt):
    try:
        cfg = load_config(config, root)
    except BookError as exc:
        _fail(exc)
    rprint("[green]OK[/green]")
    print(cfg.output_directory)

@app.command()
def plan(config: Optional[str] = ConfigOpt, root: str = RootOpt):
    try:
        cfg = load_config(config, root)
    except BookError as exc:
        _fail(exc)
    steps = [s.to_json_obj() for s in BookBuilder(cfg, root).plan()]
    print(json.dumps(steps, indent=2))

@app.command()
def enhance(
    paths: List[pathlib.Path] = typer.Argument(..., help="Built HTML pages"),
    in_place: bool = typer.Option(False, "--in-place", help="Rewrite files instead of printing"),
):
    for path in paths:
        try:
            html, added = enhance_html(path.read_text(encoding="utf-8"))
        except OSError as exc:
            _fail(exc)
        if in_place:
            path.write_text(html, encoding="utf-8")
            rprint(f"{path}: {added} code blocks")
        else:
            print(html)

def main() -> None:
    app()
