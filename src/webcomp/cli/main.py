"""Main CLI entry point."""

import logging
import sys
from pathlib import Path
from typing import Optional

import rich.panel
import rich_click as click
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

from webcomp import __version__
from webcomp.compiler.exceptions import WebCompError
from webcomp.compiler.messages import Messages
from webcomp.config import CompilerOptions, resolve_options

console = Console()
err_console = Console(stderr=True)

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.STYLE_COMMANDS_TABLE_SHOW_LINES = False
click.rich_click.STYLE_COMMANDS_TABLE_PAD_EDGE = False
click.rich_click.STYLE_COMMANDS_TABLE_BOX = None
click.rich_click.STYLE_OPTIONS_TABLE_BOX = None
click.rich_click.STYLE_COMMANDS_PANEL_BOX = None
click.rich_click.STYLE_OPTIONS_PANEL_BOX = None
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running 'webcomp --help' for more information."

# Cyan theme
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"

click.rich_click.COMMAND_GROUPS = {
    "webcomp": [
        {
            "name": "Commands",
            "commands": ["compile", "inspect"],
        }
    ]
}

# Workaround: rich-click wraps tables in Panels which default to expand=True.
# We monkeypatch Panel to default expand=False to allow natural resizing.
original_panel_init = rich.panel.Panel.__init__


def panel_init(self, *args, **kwargs):
    kwargs.setdefault("expand", False)
    original_panel_init(self, *args, **kwargs)


rich.panel.Panel.__init__ = panel_init  # type: ignore[method-assign]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )


def _load_options(
    config: Optional[str], runtime_module: Optional[str], out_dir: Optional[str] = None
) -> CompilerOptions:
    try:
        return resolve_options(config, runtime_module=runtime_module, out_dir=out_dir)
    except WebCompError as e:
        raise click.ClickException(str(e))


@click.group(
    help=f"""
[bold white on cyan] webcomp [/] [bold cyan]v{__version__}[/] Compile annotated templates into component code.

Run [bold cyan]webcomp compile INPUT[/] to write the generated modules.
Run [bold cyan]webcomp inspect INPUT[/] to print them instead.

[dim]INPUT is a JSON metadata file produced by the template analyser.[/dim]
"""
)
@click.version_option(__version__)
def cli() -> None:
    pass


@cli.command()
@click.argument("input_file", metavar="INPUT", type=click.Path(exists=True, dir_okay=False))
@click.option("--out-dir", default=None, help="Output directory (default: config OUT_DIR or 'out').")
@click.option("--config", "config_file", default=None, help="Path to a webcomp.config.py file.")
@click.option("--runtime-module", default=None, help="Module imported as 'autogenerated'.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def compile(
    input_file: str,
    out_dir: Optional[str],
    config_file: Optional[str],
    runtime_module: Optional[str],
    verbose: bool,
) -> None:
    """Compile a metadata file into Python modules."""
    from webcomp.compiler.build import build_file
    from webcomp.compiler.loader import load_file_info

    _configure_logging(verbose)
    options = _load_options(config_file, runtime_module, out_dir)
    messages = Messages()

    console.print(f"🔨 Compiling [cyan]{input_file}[/]...")
    try:
        info = load_file_info(input_file)
        summary = build_file(info, Path(options.out_dir), options, messages)
    except WebCompError as e:
        err_console.print(f"[bold red]error[/] {e}", highlight=False)
        sys.exit(1)

    if summary.errors:
        console.print(f"❌ Build finished with {summary.errors} error(s)")
        sys.exit(1)

    console.print(
        "✅ Build complete "
        f"(pages={summary.pages}, components={summary.components}, out={summary.out_dir})"
    )


@cli.command()
@click.argument("input_file", metavar="INPUT", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_file", default=None, help="Path to a webcomp.config.py file.")
@click.option("--runtime-module", default=None, help="Module imported as 'autogenerated'.")
def inspect(input_file: str, config_file: Optional[str], runtime_module: Optional[str]) -> None:
    """Print the generated code without writing any file."""
    from webcomp.compiler.build import compile_file
    from webcomp.compiler.loader import load_file_info

    _configure_logging(False)
    options = _load_options(config_file, runtime_module)
    messages = Messages()

    try:
        info = load_file_info(input_file)
        sources = compile_file(info, options, messages)
    except WebCompError as e:
        err_console.print(f"[bold red]error[/] {e}", highlight=False)
        sys.exit(1)

    for module_name, source in sources.items():
        console.rule(f"[bold cyan]{module_name}.py")
        console.print(Syntax(source, "python", line_numbers=True))

    if messages.has_errors:
        sys.exit(1)


if __name__ == "__main__":
    cli()
