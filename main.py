#!/usr/bin/env python3
"""
Workspace tabs - scenario console

Replays a JSON scenario of navigation steps against a TabManager and prints
the tab strip after each step. Handy for checking how a sequence of sidebar
clicks, in-content clicks and assistant actions plays out.

Scenario format (a JSON list):
    [
        {"op": "open", "path": "/clients", "source": "sidebar"},
        {"op": "open", "path": "/clients/42", "source": "user", "force_new": true},
        {"op": "pin", "tab": "active"},
        {"op": "dirty", "tab": 2, "value": true},
        {"op": "title", "tab": "active", "value": "ACME"},
        {"op": "activate", "tab": 1},
        {"op": "close", "tab": "active"},
        {"op": "close_all"}
    ]
Tab references are "active" or a 1-based strip position.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from error_handling import ErrorReporter, TabManagementError
from tab_config import TabManagerConfig
from tab_management import TabManager, icon_for

console = Console()

TabRef = Union[str, int]


def resolve_tab(manager: TabManager, ref: Optional[TabRef]) -> Optional[str]:
    """Turn "active", a 1-based position or a raw id into a tab id"""
    if ref is None or ref == "active":
        return manager.active_tab_id
    tabs = manager.tabs
    if isinstance(ref, int):
        return tabs[ref - 1].id if 1 <= ref <= len(tabs) else None
    return ref if manager.get_tab(ref) else None


def apply_step(manager: TabManager, step: Dict[str, Any]) -> str:
    """
    Apply one scenario step.

    Returns:
        Short description of what happened
    """
    op = step.get("op")
    if op == "open":
        options = {"source": step.get("source", "user"), "force_new": step.get("force_new", False)}
        if "pin" in step:
            options = bool(step["pin"])
        tab = manager.open_path(step["path"], options)
        return f"open {step['path']} -> {tab.id if tab else 'no route'}"

    tab_id = resolve_tab(manager, step.get("tab"))
    if op == "close":
        return f"close {tab_id}: {'ok' if manager.close_tab(tab_id) else 'refused'}"
    if op == "pin":
        return f"pin {tab_id}: {'ok' if manager.pin_tab(tab_id) else 'no-op'}"
    if op == "unpin":
        return f"unpin {tab_id}: {'ok' if manager.unpin_tab(tab_id) else 'no-op'}"
    if op == "dirty":
        return f"dirty {tab_id}={step.get('value', True)}: {'ok' if manager.set_tab_dirty(tab_id, step.get('value', True)) else 'no-op'}"
    if op == "title":
        return f"title {tab_id}: {'ok' if manager.update_tab_title(tab_id, step['value']) else 'no-op'}"
    if op == "activate":
        return f"activate {tab_id}: {'ok' if manager.set_active_tab(tab_id) else 'no-op'}"
    if op == "close_all":
        closed = manager.close_all_temporary_tabs()
        return f"close_all: {len(closed)} closed"
    raise ValueError(f"Unknown scenario op: {op!r}")


def render_tab_strip(manager: TabManager, caption: Optional[str] = None) -> Table:
    table = Table(title="Tabs", caption=caption, show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("", no_wrap=True)
    table.add_column("Title")
    table.add_column("Path")
    table.add_column("State")
    table.add_column("Source")

    for position, tab in enumerate(manager.tabs, start=1):
        state = []
        if tab.pinned:
            state.append("home")
        elif not tab.is_temporary:
            state.append("pinned")
        else:
            state.append("temp")
        if tab.is_dirty:
            state.append("dirty")
        marker = "[bold green]>[/bold green]" if tab.id == manager.active_tab_id else ""
        table.add_row(
            f"{marker}{position}",
            icon_for(tab.kind),
            tab.title,
            tab.path,
            ", ".join(state),
            tab.opened_by.value,
        )
    return table


def run_scenario(steps: List[Dict[str, Any]], config: Optional[TabManagerConfig] = None, quiet: bool = False,
                 reporter: Optional[ErrorReporter] = None) -> TabManager:
    """
    Replay steps against a fresh manager.

    Without a reporter the first failing step raises; with one, failures are
    recorded and the replay goes on.
    """
    manager = TabManager(config=config)
    for number, step in enumerate(steps, start=1):
        try:
            summary = apply_step(manager, step)
        except (TabManagementError, ValueError, KeyError) as e:
            if reporter is None:
                raise
            reporter.record(e, manager=manager, step=step)
            summary = f"[red]failed:[/red] {escape(str(e))}"
        if not quiet:
            console.print(render_tab_strip(manager, caption=f"step {number}: {summary}"))
    return manager


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Replay a tab navigation scenario")
    parser.add_argument("scenario", help="Path to a JSON scenario file")
    parser.add_argument("--config", help="Path to a JSON TabManagerConfig file")
    parser.add_argument("--debug", action="store_true", help="Print every tab event")
    parser.add_argument("--keep-going", action="store_true", help="Record failing steps and continue")
    args = parser.parse_args(argv)

    try:
        config = TabManagerConfig.from_file(args.config) if args.config else TabManagerConfig()
        if args.debug:
            config.logging.debug_mode = True
        steps = json.loads(Path(args.scenario).read_text(encoding="utf-8"))
        reporter = ErrorReporter() if args.keep_going else None
        run_scenario(steps, config=config, reporter=reporter)
    except (OSError, json.JSONDecodeError, ValueError, KeyError, TabManagementError) as e:
        console.print(f"[bold red]Scenario failed:[/bold red] {escape(str(e))}")
        return 1

    if reporter and reporter.errors:
        summary = reporter.get_error_summary()
        console.print(f"[bold red]{summary['total_errors']} step(s) failed[/bold red]")
        for context in reporter.errors:
            step = context.metadata.get("step", {})
            console.print(f"  {escape(str(step))}: {escape(context.message)} (active tab {context.active_tab_id})")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
