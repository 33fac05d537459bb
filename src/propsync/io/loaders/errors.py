from __future__ import annotations

"""Loader error wrapping with file path context."""

import os
from typing import Iterable

from pydantic import ValidationError as PydanticValidationError

from propsync.core.errors import ValidationError


class LoaderError(RuntimeError):
    """Wraps a failure to read or apply a value document, with its file path."""

    def __init__(self, file_path: str, message: str, *, cause: Exception | None = None):
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        base = f"{self.message} ({self._relative_path(self.file_path)})"
        if isinstance(self.cause, PydanticValidationError):
            return f"{base}: {self._format_schema_errors(self.cause.errors())}"
        if isinstance(self.cause, ValidationError):
            return f"{base}: {'; '.join(self.cause.messages)}"
        if isinstance(self.cause, KeyError):
            # KeyError str() wraps the message in quotes
            return f"{base}: {self.cause.args[0] if self.cause.args else self.cause}"
        if self.cause:
            return f"{base}: {self.cause}"
        return base

    @staticmethod
    def _relative_path(path: str) -> str:
        try:
            return os.path.relpath(path)
        except ValueError:  # pragma: no cover - different drive on Windows
            return path

    @staticmethod
    def _format_schema_errors(errors: Iterable[dict]) -> str:
        error_list = list(errors)
        snippets = []
        for err in error_list[:3]:
            loc = ".".join(str(entry) for entry in err.get("loc", [])) or "<root>"
            snippets.append(f"{loc}: {err.get('msg') or err.get('type') or 'invalid'}")
        if len(error_list) > 3:
            snippets.append(f"... ({len(error_list) - 3} more)")
        return "; ".join(snippets)

    def __str__(self) -> str:
        return self._build_message()
