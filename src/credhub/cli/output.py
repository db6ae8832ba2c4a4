"""
Terminal rendering for credentials.
"""
from dataclasses import fields, is_dataclass
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape

from credhub.credentials.values import Credential


def _print_field(console: Console, key: str, value: Any, indent: int = 0) -> None:
    pad = "  " * indent
    if is_dataclass(value):
        value = {f.name: getattr(value, f.name) for f in fields(value)}
    if isinstance(value, dict):
        console.print(f"{pad}[cyan]{escape(key)}:[/cyan]")
        for sub_key, sub_value in value.items():
            if sub_value is not None:
                _print_field(console, str(sub_key), sub_value, indent + 1)
        return
    if isinstance(value, str) and "\n" in value:
        console.print(f"{pad}[cyan]{escape(key)}:[/cyan] |", soft_wrap=True)
        for line in value.rstrip("\n").split("\n"):
            console.print(f"{pad}  {escape(line)}", soft_wrap=True)
        return
    console.print(f"{pad}[cyan]{escape(key)}:[/cyan] {escape(str(value))}", soft_wrap=True)


def print_credential(credential: Credential, console: Optional[Console] = None) -> None:
    """Render a credential as ``key: value`` lines."""
    console = console or Console(highlight=False, emoji=False)
    if credential.id is not None:
        _print_field(console, "id", credential.id)
    _print_field(console, "name", credential.name)
    _print_field(console, "type", credential.type.value)
    _print_field(console, "value", credential.value)
    if credential.version_created_at is not None:
        _print_field(console, "version_created_at", credential.version_created_at.isoformat())


def print_error(message: str, console: Optional[Console] = None) -> None:
    console = console or Console(stderr=True, highlight=False, emoji=False)
    console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)


def print_message(message: str, console: Optional[Console] = None) -> None:
    console = console or Console(highlight=False, emoji=False)
    console.print(escape(message), soft_wrap=True)
