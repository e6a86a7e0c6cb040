"""CLI for the calcpad calculator.

Usage:
    python -m calcpad list                    # Show built-in scenarios
    python -m calcpad run tip                 # Replay one scenario
    python -m calcpad run --all               # Replay every scenario
    python -m calcpad keys 12+7 Enter         # Type keys, show the display
    python -m calcpad buttons                 # Show the keypad
    python -m calcpad repl                    # Interactive session
"""

from __future__ import annotations

import json
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from calcpad.display import render_buttons, render_display
from calcpad.engine import CalculatorEngine
from calcpad.keymap import press_key, split_keys
from calcpad.models import CalculatorState
from calcpad.scenarios import ScenarioResult, list_scenarios, load_scenario, replay, run_scenario
from calcpad.settings import Settings, Theme, load_settings

app = typer.Typer(
    name="calcpad",
    help="Keypad calculator with a terminal display",
    no_args_is_help=True,
)
console = Console(stderr=True)

_QUIT_WORDS = ("quit", "exit")


def _settings(theme: Optional[str], show_state: Optional[bool] = None) -> Settings:
    """Environment settings with CLI overrides applied."""
    try:
        settings = load_settings()
        if theme is not None:
            settings.theme = Theme(theme.lower())
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}. Choose: dark, light")
        raise typer.Exit(1)
    if show_state is not None:
        settings.show_state = show_state
    return settings


def _show(state: CalculatorState, settings: Settings) -> None:
    console.print(render_display(state, settings.theme))
    if settings.show_state:
        console.print(json.dumps(state.to_dict(), ensure_ascii=False), soft_wrap=True, highlight=False)


def _report_ignored(ignored: List[str]) -> None:
    if ignored:
        console.print(f"[yellow]Ignored keys:[/yellow] {' '.join(ignored)}")


@app.command("list")
def cmd_list() -> None:
    """Show built-in scenarios."""
    scenarios = list_scenarios()

    table = Table(title="Scenarios", show_header=True, header_style="bold")
    table.add_column("Name", style="green", min_width=14)
    table.add_column("Keys", min_width=12)
    table.add_column("Expected", justify="right")
    table.add_column("Description", min_width=30)

    for s in scenarios:
        table.add_row(s.name, " ".join(s.keys), s.expected, s.description)

    console.print()
    console.print(table)
    console.print()


def _render_results(results: List[ScenarioResult]) -> None:
    table = Table(title="Scenario results", show_header=True, header_style="bold")
    table.add_column("Scenario", style="dim", min_width=14)
    table.add_column("Expected", justify="right")
    table.add_column("Actual", justify="right")
    table.add_column("Verdict", justify="center")

    for r in results:
        color = "green" if r.verdict == "pass" else "red"
        table.add_row(
            r.scenario.name,
            r.scenario.expected,
            r.actual,
            f"[{color}]{r.verdict}[/{color}]",
        )

    console.print()
    console.print(table)
    console.print()


@app.command("run")
def cmd_run(
    scenario: Optional[str] = typer.Argument(None, help="Scenario name (e.g., 'tip')"),
    all_scenarios: bool = typer.Option(False, "--all", "-a", help="Run every scenario"),
    theme: Optional[str] = typer.Option(None, "--theme", "-t", help="Display theme: dark, light"),
) -> None:
    """Replay one scenario, or all of them, and check the final display."""
    settings = _settings(theme)
    if all_scenarios:
        results = [run_scenario(s.name) for s in list_scenarios()]
    elif scenario:
        if load_scenario(scenario) is None:
            console.print(f"[red]Error:[/red] Unknown scenario: {scenario}")
            raise typer.Exit(1)
        result = run_scenario(scenario)
        _show(result.state, settings)
        results = [result]
    else:
        console.print("[red]Specify a scenario or --all[/red]")
        raise typer.Exit(1)

    _render_results(results)
    if any(r.verdict != "pass" for r in results):
        raise typer.Exit(1)


@app.command(
    "keys",
    # Key tokens like "-5" must reach the argument instead of the option parser
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
def cmd_keys(
    tokens: List[str] = typer.Argument(..., help="Keys to press, e.g. 12+7 Enter"),
    theme: Optional[str] = typer.Option(None, "--theme", "-t", help="Display theme: dark, light"),
    state: Optional[bool] = typer.Option(None, "--state/--no-state", help="Also print the raw state"),
) -> None:
    """Type keys into a fresh calculator and show the display."""
    settings = _settings(theme, state)
    final, ignored = replay(split_keys(tokens))
    _report_ignored(ignored)
    _show(final, settings)


@app.command("buttons")
def cmd_buttons(
    theme: Optional[str] = typer.Option(None, "--theme", "-t", help="Display theme: dark, light"),
) -> None:
    """Show the keypad layout."""
    settings = _settings(theme)
    console.print(render_buttons(settings.theme))


@app.command("repl")
def cmd_repl(
    theme: Optional[str] = typer.Option(None, "--theme", "-t", help="Display theme: dark, light"),
    state: Optional[bool] = typer.Option(None, "--state/--no-state", help="Also print the raw state"),
) -> None:
    """Interactive session. Each line is a run of keys; 'quit' to leave."""
    settings = _settings(theme, state)
    engine = CalculatorEngine()
    console.print("[dim]Keys: 0-9 . + - * / % = Enter Backspace Escape c  ('quit' to leave)[/dim]")
    _show(engine.get_state(), settings)

    while True:
        try:
            line = console.input("> ")
        except EOFError:
            break
        if line.strip().lower() in _QUIT_WORDS:
            break
        ignored = [key for key in split_keys([line]) if not press_key(engine, key)]
        _report_ignored(ignored)
        _show(engine.get_state(), settings)


if __name__ == "__main__":
    app()
