"""
propsync CLI: inspect declared model fields and render snapshots.

Models are referenced as ``package.module:ClassName`` and must subclass
HasFields. Values can be applied from a YAML/JSON document (--values) and
from inline ``name=value`` pairs parsed as YAML (--set, --ref).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import typer
import yaml
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console

from propsync.cli.formatters import build_fields_table
from propsync.cli.load_helpers import load_model_class, load_or_exit
from propsync.core.errors import ValidationError
from propsync.io.loaders import apply_values, load_values
from propsync.utils.error_formatting import format_violations
from propsync.utils.logging import configure_logging

app = typer.Typer(help="propsync CLI: inspect model fields and render full or dirty snapshots.")
console = Console()


def _parse_pairs(items: List[str], option: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for item in items:
        if "=" not in item:
            console.print(f"[red]Bad {option}[/red] (expected name=value): {item}")
            raise typer.Exit(code=2)
        key, value = item.split("=", 1)
        pairs[key.strip()] = value.strip()
    return pairs


def _inline_values(sets: List[str], refs: List[str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for name, text in _parse_pairs(sets, "--set").items():
        try:
            values[name] = yaml.safe_load(text)
        except yaml.YAMLError as err:
            console.print(f"[red]Bad --set value[/red] for {name}: {err}")
            raise typer.Exit(code=2)
    for name, column in _parse_pairs(refs, "--ref").items():
        values[name] = {"field": column}
    return values


@app.command("fields")
def show_fields(
    model: str = typer.Argument(..., help="Model class as module:Class"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Show the fields declared by a model."""
    configure_logging(verbose)
    model_cls = load_model_class(model, console=console)
    entries = model_cls.field_entries()
    console.print(f"[bold]{model_cls.type_name()}[/bold] ({model_cls.__module__})")
    if not entries:
        console.print("  [dim]No fields declared[/dim]")
        return
    console.print(f"Fields: {len(entries)}")
    console.print(build_fields_table(model_cls))


@app.command()
def snapshot(
    model: str = typer.Argument(..., help="Model class as module:Class"),
    values_path: Optional[str] = typer.Option(None, "--values", help="YAML/JSON value document to apply"),
    sets: List[str] = typer.Option([], "--set", "-s", help="name=value pairs (value parsed as YAML)"),
    refs: List[str] = typer.Option([], "--ref", "-r", help="name=column pairs binding a data reference"),
    dirty: bool = typer.Option(False, "--dirty", help="Only emit fields changed since construction"),
    document: bool = typer.Option(False, "--document", help="Wrap output as {type, attributes}"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Build a model instance, apply values and print its snapshot as JSON."""
    configure_logging(verbose)
    model_cls = load_model_class(model, console=console)
    instance = model_cls()

    if values_path:
        load_or_exit(load_values, values_path, instance, console=console, verbose_errors=verbose)

    inline = _inline_values(sets, refs)
    try:
        apply_values(instance, inline)
    except KeyError as err:
        console.print(f"[red]Unknown field[/red]: {err.args[0]}")
        raise typer.Exit(code=2)
    except ValidationError as err:
        name = err.field or "?"
        console.print(f"[red]Rejected value[/red] {format_violations(name, inline.get(name), err.messages)}")
        raise typer.Exit(code=1)
    except PydanticValidationError as err:
        console.print(f"[red]Invalid value entry[/red]: {err}")
        raise typer.Exit(code=1)

    if document:
        console.print_json(data=instance.to_document(dirty_only=dirty))
    elif dirty:
        console.print_json(data=instance.dirty_snapshot().to_dict())
    else:
        console.print_json(data=instance.to_external_form())


if __name__ == "__main__":
    app()
