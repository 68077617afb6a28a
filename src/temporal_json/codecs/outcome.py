"""
Decode outcomes and the JSON cursor decoders read from.

A decoder never raises for bad input: it returns Success(value) or
Failure(kind, message, path), where path locates the offending JSON value
as a tuple of field names and array indexes.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Generic, Tuple, TypeVar, Union

T = TypeVar("T")

PathStep = Union[str, int]
Path = Tuple[PathStep, ...]


class FailureKind(Enum):
    """Why a decode failed."""

    INPUT_TYPE_MISMATCH = "InputTypeMismatch"  # JSON value has the wrong type
    TEMPORAL_PARSE_FAILURE = "TemporalParseFailure"  # String does not match the format
    TEMPORAL_VALIDATION_FAILURE = "TemporalValidationFailure"  # Unknown or malformed zone
    MISSING_FIELD = "MissingField"  # Required key absent from a JSON object


def render_path(path: Path) -> str:
    """Render a path as ".events[0].start"; the root is the empty string."""
    parts = []
    for step in path:
        if isinstance(step, int):
            parts.append(f"[{step}]")
        else:
            parts.append(f".{step}")
    return "".join(parts)


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    path: Path = ()

    ok: ClassVar[bool] = False

    @property
    def path_string(self) -> str:
        return render_path(self.path)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}: {self.path_string or '<root>'}"


DecodeOutcome = Union[Success[T], Failure]


def _describe(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


@dataclass(frozen=True)
class Cursor:
    """A JSON value (as produced by ``json.loads``) and its location in the document."""

    value: Any
    path: Path = ()

    def field(self, name: str) -> "Cursor":
        """Cursor on a key of this object. Raises KeyError if the key is absent."""
        return Cursor(self.value[name], self.path + (name,))

    def index(self, position: int) -> "Cursor":
        """Cursor on an element of this array. Raises IndexError if out of range."""
        return Cursor(self.value[position], self.path + (position,))

    def as_str(self) -> "DecodeOutcome[str]":
        """The value as a string, or an InputTypeMismatch failure."""
        if isinstance(self.value, str):
            return Success(self.value)
        return self.type_mismatch("string")

    def type_mismatch(self, expected: str) -> Failure:
        return Failure(
            FailureKind.INPUT_TYPE_MISMATCH,
            f"Got value {_describe(self.value)} with wrong type, expecting {expected}",
            self.path,
        )
