"""
Field enumeration: turns a dataclass or pydantic model into FieldDescriptors.

The kind of each field is picked here, from its declared type, so the rest
of the package never looks at runtime types.
"""

import collections.abc
import dataclasses
import enum
import types
import typing
from dataclasses import dataclass
from typing import Annotated, Any, Iterator, get_args, get_origin

from pydantic import BaseModel

from envconfig.context import ResolutionContext
from envconfig.formatting import format_default
from envconfig.logger import get_loader_logger
from envconfig.tags import SKIP, Default, Env

logger = get_loader_logger()

_COLLECTION_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
)


class FieldKind(enum.Enum):
    """Closed set of field types the coercer knows about."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float64"
    STRING = "string"
    COLLECTION = "array"

    @property
    def type_tag(self) -> str:
        return self.value


@dataclass(frozen=True)
class FieldDescriptor:
    """One structure member: attribute name, kind, env tag and default tag."""

    name: str
    kind: FieldKind
    tag: str
    default: str = ""


def is_pydantic_model(obj: Any) -> bool:
    cls = obj if isinstance(obj, type) else type(obj)
    return issubclass(cls, BaseModel)


def is_schema(obj: Any) -> bool:
    return dataclasses.is_dataclass(obj) or is_pydantic_model(obj)


def is_frozen(obj: Any) -> bool:
    """True when attribute assignment on the schema's instances would be refused."""
    cls = obj if isinstance(obj, type) else type(obj)
    if dataclasses.is_dataclass(cls):
        return cls.__dataclass_params__.frozen
    if is_pydantic_model(cls):
        if cls.model_config.get("frozen", False):
            return True
        return any(info.frozen for info in cls.model_fields.values())
    return False


def _split_annotated(hint: Any) -> tuple[Any, list[Any]]:
    """Peel Annotated[T, ...] into (T, extras)."""
    if get_origin(hint) is Annotated:
        args = get_args(hint)
        return args[0], list(args[1:])
    return hint, []


def _is_union(origin: Any) -> bool:
    return origin is typing.Union or origin is types.UnionType


def unwrap_optional(hint: Any) -> Any:
    """T | None -> T. Other unions are returned unchanged."""
    if _is_union(get_origin(hint)):
        args = [a for a in get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def kind_of(hint: Any) -> FieldKind | None:
    """Map a declared type to its FieldKind, or None when unsupported."""
    hint, _ = _split_annotated(hint)
    hint = unwrap_optional(hint)
    hint, _ = _split_annotated(hint)
    # bool is a subclass of int, check it first
    if hint is bool:
        return FieldKind.BOOL
    if hint is int:
        return FieldKind.INT
    if hint is float:
        return FieldKind.FLOAT
    if hint is str:
        return FieldKind.STRING
    origin = get_origin(hint) or hint
    if origin in _COLLECTION_ORIGINS:
        return FieldKind.COLLECTION
    return None


def _tag_from(extras: list[Any], metadata: Any, key: str) -> str | None:
    for m in extras:
        if isinstance(m, Env):
            return m.name
    if isinstance(metadata, collections.abc.Mapping) and key in metadata:
        return str(metadata[key])
    return None


def _default_from(extras: list[Any], metadata: Any, key: str) -> str:
    for m in extras:
        if isinstance(m, Default):
            return format_default(m.value)
    if isinstance(metadata, collections.abc.Mapping) and key in metadata:
        return format_default(metadata[key])
    return ""


def _raw_fields(schema: Any) -> Iterator[tuple[str, Any, list[Any], Any]]:
    """Yield (name, hint, annotated extras, tag metadata) for every field."""
    cls = schema if isinstance(schema, type) else type(schema)
    if dataclasses.is_dataclass(cls):
        hints = typing.get_type_hints(cls, include_extras=True)
        for f in dataclasses.fields(cls):
            hint, extras = _split_annotated(hints.get(f.name, f.type))
            yield f.name, hint, extras, f.metadata
        return
    if is_pydantic_model(cls):
        for name, info in cls.model_fields.items():
            hint, extras = _split_annotated(info.annotation)
            extras = list(info.metadata) + extras
            yield name, hint, extras, info.json_schema_extra
        return
    raise TypeError(f"{cls.__name__} is neither a dataclass nor a pydantic model")


def describe_fields(schema: Any, ctx: ResolutionContext) -> list[FieldDescriptor]:
    """
    Build descriptors for every supported field of *schema* (class or instance).

    Tag lookup: Env(...) in Annotated, then metadata[ctx.tag], then the
    attribute name. A tag of "-" skips the field. ctx.prefix, when set, is
    joined to the tag with "_".
    """
    descriptors = []
    for name, hint, extras, metadata in _raw_fields(schema):
        kind = kind_of(hint)
        if kind is None:
            logger.debug(f"Skipping {name}: unsupported type {hint!r}")
            continue
        tag = _tag_from(extras, metadata, ctx.tag)
        if tag == SKIP:
            continue
        if not tag:
            tag = name
        if ctx.prefix:
            tag = f"{ctx.prefix}_{tag}"
        default = _default_from(extras, metadata, ctx.tag_default)
        descriptors.append(FieldDescriptor(name=name, kind=kind, tag=tag, default=default))
    return descriptors


def zero_value(hint: Any) -> Any:
    """Value used for a field that has no declared default in its schema."""
    hint, _ = _split_annotated(hint)
    if unwrap_optional(hint) is not hint:
        return None
    kind = kind_of(hint)
    if kind is FieldKind.BOOL:
        return False
    if kind is FieldKind.INT:
        return 0
    if kind is FieldKind.FLOAT:
        return 0.0
    if kind is FieldKind.STRING:
        return ""
    if kind is FieldKind.COLLECTION:
        origin = get_origin(hint) or hint
        return origin() if origin in (list, tuple, set, frozenset) else []
    return None
