"""
Command-line interface for Calc Studio.

Provides commands for:
- Running the API server
- Running a single calculation
- Greeting
- Printing the demo calculations
"""

import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from calc_studio import config
from calc_studio.calculator import (
    DEMO_CALCULATIONS,
    InvalidArgumentError,
    calculator,
    format_result,
    parse_operand,
)
from calc_studio.example import Example
from calc_studio.models import Operation

app = typer.Typer(
    name="calc",
    help="Calc Studio - Calculator Demo Application",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML settings file", exists=True, dir_okay=False,
    ),
):
    """Load settings and configure logging before any command runs."""
    if config_file:
        # Exported so a reloaded server process loads the same file
        os.environ[config.CONFIG_FILE_ENV] = str(config_file.resolve())
    settings = config.load_settings(config_file)
    config.configure_logging(settings.log_level, json=settings.log_json)


# =============================================================================
# Server Commands
# =============================================================================

@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind to"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
):
    """Start the Calc Studio server."""
    import uvicorn

    settings = config.get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"[bold green]Starting Calc Studio server on {host}:{port}[/]")

    uvicorn.run(
        "calc_studio.api:app",
        host=host,
        port=port,
        reload=reload,
    )


# =============================================================================
# Calculator Commands
# =============================================================================

@app.command()
def calc(
    operation: Operation = typer.Argument(..., help="Operation to run"),
    a: str = typer.Argument(..., help="First operand"),
    b: str = typer.Argument(..., help="Second operand"),
):
    """Run a single calculation."""
    try:
        result = calculator.apply(operation, parse_operand(a), parse_operand(b))
    except InvalidArgumentError as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        raise typer.Exit(1)

    console.print(result)


@app.command()
def demo():
    """Show the calculations rendered on the demo page."""
    table = Table(title="Calculator Demo")
    table.add_column("Expression", style="cyan")
    table.add_column("Result", style="green", justify="right")

    for op, a, b in DEMO_CALCULATIONS:
        table.add_row(f"{a} {op.symbol} {b}", format_result(calculator.apply(op, a, b)))

    console.print(table)


# =============================================================================
# Greeting Commands
# =============================================================================

@app.command()
def greet(
    name: Optional[str] = typer.Argument(None, help="Name to greet"),
):
    """Print a greeting."""
    name = name or config.get_settings().greeting_name
    console.print(Example().greet(name))


if __name__ == "__main__":
    app()
