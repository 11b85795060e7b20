"""Request routing primitives for mounting store operations behind paths."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Protocol

from pydantic import BaseModel, ConfigDict

from .errors import UnsupportedOperation, UnsupportedPath
from .storage import Storage


class Operation(str, Enum):
    READ = "read"
    WRITE = "write"
    HELP = "help"


class FieldType(str, Enum):
    STRING = "string"


class Response(BaseModel):
    """Handler response; ``error`` set means a client-correctable failure."""

    data: Dict[str, Any] | None = None
    error: str | None = None

    model_config = ConfigDict(extra="forbid")

    def is_error(self) -> bool:
        return self.error is not None


def error_response(message: str) -> Response:
    return Response(error=message)


class FieldSchema(BaseModel):
    type: FieldType = FieldType.STRING
    description: str = ""
    default: Any | None = None

    model_config = ConfigDict(frozen=True)


class FieldValidationError(ValueError):
    """Raised when a request field cannot be coerced to its schema type."""


@dataclass(slots=True)
class FieldData:
    """Raw request data paired with the schema of the path it targets."""

    raw: Mapping[str, Any]
    schema: Mapping[str, FieldSchema]

    def get(self, name: str) -> Any:
        if name not in self.schema:
            raise KeyError(f"field {name!r} is not declared for this path")
        declared = self.schema[name]
        value = self.raw.get(name)
        if value is None:
            return declared.default if declared.default is not None else _zero_value(declared.type)
        return _coerce(name, value, declared.type)

    def validate(self) -> None:
        for name in self.schema:
            self.get(name)


def _zero_value(kind: FieldType) -> Any:
    if kind is FieldType.STRING:
        return ""
    raise ValueError(f"unknown field type {kind}")


def _coerce(name: str, value: Any, kind: FieldType) -> Any:
    if kind is FieldType.STRING:
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        raise FieldValidationError(f"'{name}' must be a string")
    raise ValueError(f"unknown field type {kind}")


@dataclass(slots=True)
class Request:
    """Operation on ``path`` carrying field ``data`` and the storage handle."""

    operation: Operation
    path: str
    storage: Storage
    data: Dict[str, Any] = field(default_factory=dict)


class OperationHandler(Protocol):
    def __call__(self, request: Request, data: FieldData) -> Optional[Response]:  # pragma: no cover - protocol
        ...


@dataclass(slots=True)
class Path:
    """Path pattern with its field schema, callbacks and help text."""

    pattern: str
    fields: Dict[str, FieldSchema] = field(default_factory=dict)
    callbacks: Dict[Operation, OperationHandler] = field(default_factory=dict)
    help_synopsis: str = ""
    help_description: str = ""

    def help_response(self) -> Response:
        return Response(
            data={
                "synopsis": self.help_synopsis.strip(),
                "description": self.help_description.strip(),
                "fields": {
                    name: {"type": declared.type.value, "description": declared.description}
                    for name, declared in self.fields.items()
                },
            }
        )


class PathRegistry:
    """Registry mapping path patterns to their operation callbacks."""

    def __init__(self) -> None:
        self._paths: Dict[str, Path] = {}

    def register(self, path: Path) -> None:
        if path.pattern in self._paths:
            raise ValueError(f"Path already registered for {path.pattern}")
        self._paths[path.pattern] = path

    def patterns(self) -> list[str]:
        return sorted(self._paths)

    def lookup(self, pattern: str) -> Path:
        path = self._paths.get(pattern)
        if path is None:
            raise UnsupportedPath(pattern)
        return path

    def dispatch(self, request: Request) -> Optional[Response]:
        path = self.lookup(request.path)
        if request.operation is Operation.HELP:
            return path.help_response()
        handler = path.callbacks.get(request.operation)
        if handler is None:
            raise UnsupportedOperation(request.path, request.operation.value)
        data = FieldData(raw=request.data, schema=path.fields)
        try:
            data.validate()
        except FieldValidationError as exc:
            return error_response(f"Field validation failed: {exc}")
        return handler(request, data)


__all__ = [
    "FieldData",
    "FieldSchema",
    "FieldType",
    "FieldValidationError",
    "Operation",
    "OperationHandler",
    "Path",
    "PathRegistry",
    "Request",
    "Response",
    "error_response",
]
