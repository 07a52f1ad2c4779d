"""JSON encoding of dataclass messages with a chosen member order.

Members are written in the order of ``fields`` with no whitespace. Reading
keeps the default of any member that is absent and ignores members that are
not named. A type mismatch, malformed JSON or a top level that is not an
object raises :class:`ReflectError`.
"""

from __future__ import annotations

import dataclasses
import inspect
import json
import re
import types
import typing
from collections.abc import Iterable, Sequence
from typing import Any, Optional, Union


class ReflectError(ValueError):
    """Raised when a value cannot be reflected to or from JSON."""


_KNOWN_NAMES: dict[str, Any] = {
    "int": int,
    "str": str,
    "bool": bool,
    "float": float,
    "bytes": bytes,
    "None": type(None),
    "NoneType": type(None),
    "Any": Any,
    "list": list,
    "List": list,
    "dict": dict,
    "Dict": dict,
    "Optional": Optional,
    "Union": Union,
}

_ANNOTATION_PART = re.compile(r"[A-Za-z_][\w.]*|[\[\],|]")


class _AnnotationParser:
    """Resolves a string annotation into a typing object without evaluating it."""

    def __init__(self, text: str, namespace: dict[str, Any]) -> None:
        self._parts = _ANNOTATION_PART.findall(text)
        self._pos = 0
        self._namespace = namespace

    def parse(self) -> Any:
        result = self._union()
        if self._pos != len(self._parts):
            raise ReflectError(f"cannot resolve annotation near {self._parts[self._pos]!r}")
        return result

    def _peek(self) -> str | None:
        return self._parts[self._pos] if self._pos < len(self._parts) else None

    def _take(self) -> str:
        part = self._peek()
        if part is None:
            raise ReflectError("unexpected end of annotation")
        self._pos += 1
        return part

    def _union(self) -> Any:
        members = [self._primary()]
        while self._peek() == "|":
            self._take()
            members.append(self._primary())
        if len(members) == 1:
            return members[0]
        return Union[tuple(members)]

    def _lookup(self, name: str) -> Any:
        short = name.rsplit(".", 1)[-1]
        if short in _KNOWN_NAMES:
            return _KNOWN_NAMES[short]
        if short in self._namespace:
            return self._namespace[short]
        raise ReflectError(f"cannot resolve type name {name!r}")

    def _primary(self) -> Any:
        part = self._take()
        if part in ("[", "]", ",", "|"):
            raise ReflectError(f"unexpected {part!r} in annotation")
        base = self._lookup(part)
        if self._peek() != "[":
            return base
        self._take()
        args = [self._union()]
        while self._peek() == ",":
            self._take()
            args.append(self._union())
        if self._take() != "]":
            raise ReflectError("unbalanced brackets in annotation")
        if base is Optional:
            return Optional[args[0]]
        if base is Union:
            return Union[tuple(args)]
        if base is list:
            return list[args[0]]
        if base is dict:
            if len(args) != 2:
                raise ReflectError("dict annotation needs two arguments")
            return dict[args[0], args[1]]
        raise ReflectError(f"cannot subscript {part!r}")


def _field_names(cls: type, fields: Iterable[str] | None) -> Sequence[str]:
    if fields is not None:
        return tuple(fields)
    declared = getattr(cls, "REFLECT_FIELDS", None)
    if declared is not None:
        return tuple(declared)
    if dataclasses.is_dataclass(cls):
        return tuple(f.name for f in dataclasses.fields(cls))
    raise ReflectError(f"{cls.__name__} has no reflectable fields")


def _hints(cls: type) -> dict[str, Any]:
    if not dataclasses.is_dataclass(cls):
        raise ReflectError(f"{cls.__name__} is not a dataclass")
    module = inspect.getmodule(cls)
    namespace = dict(vars(module)) if module is not None else {}
    hints: dict[str, Any] = {}
    for field in dataclasses.fields(cls):
        annotation = field.type
        if isinstance(annotation, str):
            annotation = _AnnotationParser(annotation, namespace).parse()
        hints[field.name] = annotation
    return hints


def _unwrap_optional(hint: Any) -> tuple[Any, bool]:
    origin = typing.get_origin(hint)
    if origin is Union or origin is types.UnionType:
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        optional = len(args) != len(typing.get_args(hint))
        if len(args) == 1:
            return args[0], optional
        return Union[tuple(args)], optional
    return hint, False


def _is_struct_type(hint: Any) -> bool:
    return isinstance(hint, type) and dataclasses.is_dataclass(hint)


def _encode(value: Any, hint: Any, path: str) -> Any:
    inner, _ = _unwrap_optional(hint)
    if value is None:
        return None
    origin = typing.get_origin(inner)
    if origin is list or isinstance(value, list) and inner is Any:
        args = typing.get_args(inner)
        item = args[0] if args else Any
        return [_encode(v, item, f"{path}.{i}") for i, v in enumerate(value)]
    if origin is dict or isinstance(value, dict) and inner is Any:
        args = typing.get_args(inner)
        item = args[1] if len(args) == 2 else Any
        return {str(k): _encode(v, item, f"{path}.{k}") for k, v in value.items()}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _encode_struct(value, None, path)
    if isinstance(value, (bool, int, float, str)):
        return value
    raise ReflectError(f"{path or 'value'}: cannot encode {type(value).__name__}")


def _encode_struct(obj: Any, fields: Iterable[str] | None, path: str) -> dict[str, Any]:
    cls = type(obj)
    hints = _hints(cls)
    out: dict[str, Any] = {}
    for name in _field_names(cls, fields):
        if name not in hints:
            raise ReflectError(f"{cls.__name__} has no field {name!r}")
        hint = hints[name]
        value = getattr(obj, name)
        _, optional = _unwrap_optional(hint)
        if optional and value is None:
            continue
        out[name] = _encode(value, hint, f"{path}.{name}" if path else name)
    return out


def _mismatch(path: str, expected: str) -> ReflectError:
    return ReflectError(f"{path or 'value'}: expected {expected}")


def _decode(value: Any, hint: Any, path: str) -> Any:
    inner, optional = _unwrap_optional(hint)
    if optional and value is None:
        return None
    if inner is Any:
        return value
    origin = typing.get_origin(inner)
    if origin is list:
        if not isinstance(value, list):
            raise _mismatch(path, "array")
        args = typing.get_args(inner)
        item = args[0] if args else Any
        return [_decode(v, item, f"{path}.{i}") for i, v in enumerate(value)]
    if origin is dict:
        if not isinstance(value, dict):
            raise _mismatch(path, "object")
        args = typing.get_args(inner)
        item = args[1] if len(args) == 2 else Any
        return {k: _decode(v, item, f"{path}.{k}") for k, v in value.items()}
    if _is_struct_type(inner):
        return _decode_struct(inner, value, None, path)
    if inner is bool:
        if not isinstance(value, bool):
            raise _mismatch(path, "bool")
        return value
    if inner is int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise _mismatch(path, "integer")
        return value
    if inner is float:
        if not isinstance(value, float):
            raise _mismatch(path, "double")
        return value
    if inner is str:
        if not isinstance(value, str):
            raise _mismatch(path, "string")
        return value
    raise ReflectError(f"{path or 'value'}: unsupported type {inner!r}")


def _decode_struct(cls: type, value: Any, fields: Iterable[str] | None, path: str) -> Any:
    if not isinstance(value, dict):
        raise _mismatch(path, "object")
    hints = _hints(cls)
    obj = cls()
    for name in _field_names(cls, fields):
        if name not in hints:
            raise ReflectError(f"{cls.__name__} has no field {name!r}")
        if name in value:
            member_path = f"{path}.{name}" if path else name
            setattr(obj, name, _decode(value[name], hints[name], member_path))
    return obj


def serialize_struct(obj: Any, fields: Iterable[str] | None = None) -> str:
    """Encode a dataclass instance as compact JSON, members in ``fields`` order."""
    if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
        raise ReflectError("serialize_struct needs a dataclass instance")
    encoded = _encode_struct(obj, fields, "")
    return json.dumps(encoded, separators=(",", ":"), ensure_ascii=False)


def deserialize_struct(cls: type, text: str | bytes | bytearray, fields: Iterable[str] | None = None) -> Any:
    """Build an instance of ``cls`` from JSON text, reading only ``fields``."""
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ReflectError(f"invalid utf-8: {exc}") from exc
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ReflectError(f"invalid json: {exc}") from exc
    return _decode_struct(cls, document, fields, "")