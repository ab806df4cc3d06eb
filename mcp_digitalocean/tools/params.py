"""
Parameter declarations and the argument extractor.

Tools receive an untyped argument bag from the caller. Each tool declares its
parameters as `Param` values; `extract_arguments` turns the bag into a dict of
typed values or raises `ArgumentError` describing the first violated
constraint. A wrong type or a missing field is always an `ArgumentError`,
never an unchecked exception.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from ..do_client import ListOptions


class Kind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


class ArgumentError(ValueError):
    """Caller-supplied arguments do not satisfy a tool's parameter declarations."""


@dataclass(frozen=True)
class Param:
    """
    One declared tool or resource parameter.

    `from_text` enables the text-encoded form of a kind:
    - NUMBER / INTEGER: "42" is accepted next to 42;
    - BOOLEAN: "true" / "false";
    - ARRAY: "a, b,c" is split on commas, trimmed, empty parts dropped;
    - OBJECT: a string holding serialized JSON.

    `schema` is any type pydantic can validate (a model, `List[Model]`,
    `Dict[str, Any]`, ...). OBJECT and ARRAY values are validated against it
    and the validated value replaces the raw one.
    """

    name: str
    kind: Kind = Kind.STRING
    required: bool = False
    default: Any = None
    description: str = ""
    from_text: bool = False
    items: Optional[Kind] = None
    schema: Any = None
    required_message: Optional[str] = None

    def json_schema(self) -> Dict[str, Any]:
        if self.from_text:
            prop: Dict[str, Any] = {"type": "string"}
        elif self.kind == Kind.INTEGER:
            prop = {"type": "number"}
        else:
            prop = {"type": self.kind.value}
        if self.kind == Kind.ARRAY and not self.from_text:
            prop["items"] = {"type": (self.items or Kind.STRING).value}
        if self.description:
            prop["description"] = self.description
        if self.default is not None:
            prop["default"] = self.default
        return prop


def extract_arguments(
    arguments: Optional[Mapping[str, Any]],
    params: Sequence[Param],
) -> Dict[str, Any]:
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ArgumentError("Arguments must be an object")

    values: Dict[str, Any] = {}
    for param in params:
        raw = arguments.get(param.name)
        if raw is None or raw == "":
            if param.required and param.default is None:
                raise ArgumentError(param.required_message or f"{param.name} is required")
            values[param.name] = _default(param)
            continue
        values[param.name] = _coerce(param, raw)
    return values


def list_options(
    args: Mapping[str, Any],
    page: str = "Page",
    per_page: str = "PerPage",
) -> Optional[ListOptions]:
    """
    Build backend pagination from extracted arguments.

    Returns None when neither value is present: "no pagination" and "page 1"
    are different requests for the API.
    """
    page_value = args.get(page)
    per_page_value = args.get(per_page)
    if page_value is None and per_page_value is None:
        return None
    return ListOptions(page=page_value, per_page=per_page_value)


def _default(param: Param) -> Any:
    if param.default is None:
        return [] if param.kind == Kind.ARRAY else None
    if isinstance(param.default, (list, dict)):
        return type(param.default)(param.default)
    return param.default


def _invalid(param: Param, expected: str) -> ArgumentError:
    return ArgumentError(f"Invalid or missing '{param.name}' (expected {expected})")


def _coerce(param: Param, raw: Any) -> Any:
    kind = param.kind
    if kind == Kind.STRING:
        if isinstance(raw, str):
            return raw
        raise _invalid(param, "string")
    if kind in (Kind.NUMBER, Kind.INTEGER):
        return _coerce_number(param, raw)
    if kind == Kind.BOOLEAN:
        return _coerce_bool(param, raw)
    if kind == Kind.ARRAY:
        return _coerce_array(param, raw)
    return _coerce_object(param, raw)


def _coerce_number(param: Param, raw: Any) -> Any:
    expected = "integer" if param.kind == Kind.INTEGER else "number"
    value: Any = None
    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, (int, float)):
        value = raw
    elif isinstance(raw, str) and param.from_text:
        text = raw.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                value = None
    if value is None or (isinstance(value, float) and not math.isfinite(value)):
        raise _invalid(param, expected)

    if param.kind == Kind.INTEGER:
        # Truncates toward zero; no range check.
        return int(value)
    return value


def _coerce_bool(param: Param, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and param.from_text:
        text = raw.strip().lower()
        if text == "true":
            return True
        if text == "false":
            return False
    raise _invalid(param, "boolean")


def _coerce_array(param: Param, raw: Any) -> List[Any]:
    item_kind = param.items or Kind.STRING
    if isinstance(raw, str) and param.from_text:
        parts = [p.strip() for p in raw.split(",")]
        raw = [p for p in parts if p]
    elif not isinstance(raw, (list, tuple)):
        raise _invalid(param, f"array of {item_kind.value}")

    if param.schema is not None:
        return _validate(param, raw)
    if param.items is None:
        return list(raw)

    # Text-encoded arrays carry strings; let numeric items parse from them.
    item = Param(name=param.name, kind=item_kind, from_text=param.from_text)
    try:
        return [_coerce(item, element) for element in raw]
    except ArgumentError:
        raise _invalid(param, f"array of {item_kind.value}") from None


def _coerce_object(param: Param, raw: Any) -> Any:
    if isinstance(raw, str):
        if not param.from_text:
            raise _invalid(param, "object")
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ArgumentError(f"Invalid {param.name}: {e}") from None

    if param.schema is None:
        if not isinstance(raw, dict):
            raise _invalid(param, "object")
        return raw
    return _validate(param, raw)


def _validate(param: Param, raw: Any) -> Any:
    try:
        return _adapter(param.schema).validate_python(raw)
    except ValidationError as e:
        raise ArgumentError(f"Invalid {param.name}: {e}") from None


@lru_cache(maxsize=None)
def _adapter(schema: Any) -> TypeAdapter:
    return TypeAdapter(schema)
