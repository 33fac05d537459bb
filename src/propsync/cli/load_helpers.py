from __future__ import annotations

"""Shared helpers for resolving models and value documents with CLI-friendly errors."""

import importlib
from pathlib import Path
from typing import Any, Callable, Type

import typer
from rich.console import Console

from propsync.core.model import HasFields
from propsync.io.loaders import LoaderError


def load_model_class(target: str, *, console: Console) -> Type[HasFields]:
    """Resolve ``package.module:ClassName`` to a HasFields subclass or exit."""
    module_name, sep, class_name = target.partition(":")
    if not sep or not module_name or not class_name:
        console.print(f"[red]Bad model reference[/red] (expected module:Class): {target}")
        raise typer.Exit(code=2)
    try:
        module = importlib.import_module(module_name)
    except ImportError as err:
        console.print(f"[red]Cannot import module[/red] {module_name}: {err}")
        raise typer.Exit(code=2)
    model_cls = getattr(module, class_name, None)
    if not isinstance(model_cls, type) or not issubclass(model_cls, HasFields):
        console.print(f"[red]Not a HasFields model[/red]: {target}")
        raise typer.Exit(code=2)
    return model_cls


def load_or_exit(
    loader_fn: Callable[..., Any],
    *args: Any,
    console: Console,
    verbose_errors: bool = False,
    **kwargs: Any,
) -> Any:
    if args:
        first = args[0]
        if isinstance(first, str) and not Path(first).exists():
            console.print(f"[red]Path not found:[/red] {first}")
            raise typer.Exit(code=1)
    try:
        return loader_fn(*args, **kwargs)
    except LoaderError as err:
        if verbose_errors and err.cause:
            console.print(f"[red]Failed to load values:[/red] {err.message}\n{err.cause!r}")
        else:
            console.print(f"[red]Failed to load values:[/red] {err}")
        raise typer.Exit(code=1)


__all__ = ["load_model_class", "load_or_exit"]
