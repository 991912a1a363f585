"""
Reflection-based config loader.
Walks the fields of a dataclass or pydantic model, resolves each one against
the environment and coerces the result into the field's type.
"""

import dataclasses
import sys
import typing
from typing import Any, Callable, Mapping, TextIO, TypeVar

from envconfig.coerce import coerce
from envconfig.context import ResolutionContext
from envconfig.fields import describe_fields, is_frozen, is_pydantic_model, is_schema, zero_value
from envconfig.logger import get_loader_logger

logger = get_loader_logger()

T = TypeVar("T")


def setup(
    tag: str = "env",
    tag_default: str = "default",
    kebab_cfg_to_snake_env: bool = False,
    *,
    prefix: str = "",
    environ: Mapping[str, str] | None = None,
) -> ResolutionContext:
    """
    Build a ResolutionContext.

    - tag: metadata key naming the env var of a field
    - tag_default: metadata key holding the field's default
    - kebab_cfg_to_snake_env: map "max-retries" to MAX_RETRIES
    - environ: mapping to read from (default: os.environ). Pass a dict for tests.
    """
    ctx = ResolutionContext(prefix=prefix, usage=default_usage)
    set_tag(ctx, tag)
    set_tag_default(ctx, tag_default)
    set_kebab_cfg_to_snake_env(ctx, kebab_cfg_to_snake_env)
    if environ is not None:
        ctx.environ = environ
    return ctx


def set_tag(ctx: ResolutionContext, tag: str) -> None:
    ctx.tag = tag


def set_tag_default(ctx: ResolutionContext, tag: str) -> None:
    ctx.tag_default = tag


def set_kebab_cfg_to_snake_env(ctx: ResolutionContext, enabled: bool) -> None:
    ctx.kebab_cfg_to_snake_env = enabled


def _coerce_fields(
    schema: Any,
    current_of: Callable[[str], Any],
    assign: Callable[[str, Any], None],
    ctx: ResolutionContext,
) -> None:
    descriptors = describe_fields(schema, ctx)
    name = schema.__name__ if isinstance(schema, type) else type(schema).__name__
    logger.debug(f"Parsing {name}: {len(descriptors)} fields")
    for descriptor in descriptors:
        current = current_of(descriptor.name)
        new_value = coerce(descriptor, current, ctx)
        if new_value is not current:
            assign(descriptor.name, new_value)


def parse(instance: Any, ctx: ResolutionContext | None = None) -> ResolutionContext:
    """
    Populate *instance* in place from the environment.

    Raises the first ParseError met; that field keeps its previous value and
    the remaining fields are not visited. Returns the context so the caller
    can print the accumulated help text. Frozen instances are rejected; use
    load_config() for frozen schemas.
    """
    if isinstance(instance, type) or not is_schema(instance):
        raise TypeError("parse() expects a dataclass or pydantic model instance")
    if is_frozen(instance):
        raise TypeError(f"{type(instance).__name__} is frozen; use load_config() to build it")
    if ctx is None:
        ctx = setup()

    _coerce_fields(
        instance,
        lambda name: getattr(instance, name, None),
        lambda name, value: setattr(instance, name, value),
        ctx,
    )
    return ctx


def _schema_defaults(schema_class: type) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return (starting values, hints of the fields with no schema default)."""
    values: dict[str, Any] = {}
    unset: dict[str, Any] = {}
    if is_pydantic_model(schema_class):
        for name, info in schema_class.model_fields.items():
            if info.is_required():
                values[name] = None
                unset[name] = info.annotation
            else:
                values[name] = info.get_default(call_default_factory=True)
        return values, unset

    hints = typing.get_type_hints(schema_class, include_extras=True)
    for f in dataclasses.fields(schema_class):
        if f.default is not dataclasses.MISSING:
            values[f.name] = f.default
        elif f.default_factory is not dataclasses.MISSING:
            values[f.name] = f.default_factory()
        else:
            values[f.name] = None
            unset[f.name] = hints.get(f.name, f.type)
    return values, unset


def load_config(schema_class: type[T], ctx: ResolutionContext | None = None) -> T:
    """
    Resolve every field of *schema_class*, then build the instance.

    Values are resolved before construction, so frozen dataclasses and frozen
    pydantic models load like any other schema. Fields without a default in
    the schema start unset, so their tag default applies (a bool field set to
    False would otherwise mask it). Fields still unset after resolution get
    their zero value: False, 0, 0.0, "", an empty collection, or None for
    Optional fields.
    """
    if not isinstance(schema_class, type) or not is_schema(schema_class):
        raise TypeError("Schema must be a dataclass or pydantic model")
    if ctx is None:
        ctx = setup()

    values, unset = _schema_defaults(schema_class)
    resolved: set[str] = set()

    def assign(name: str, value: Any) -> None:
        values[name] = value
        resolved.add(name)

    _coerce_fields(schema_class, values.get, assign, ctx)

    for name, hint in unset.items():
        if values[name] is None:
            values[name] = zero_value(hint)

    if is_pydantic_model(schema_class):
        return schema_class.model_construct(**values)

    init_fields = [f for f in dataclasses.fields(schema_class) if f.init]
    instance = schema_class(**{f.name: values[f.name] for f in init_fields})
    for f in dataclasses.fields(schema_class):
        if f.init:
            continue
        # __post_init__ may have set it; only resolved or missing values are written
        if f.name in resolved or not hasattr(instance, f.name):
            object.__setattr__(instance, f.name, values[f.name])
    return instance


def print_defaults(ctx: ResolutionContext, file: TextIO | None = None) -> None:
    """Print the help text accumulated in *ctx*."""
    out = file if file is not None else sys.stdout
    print("Environment variables:", file=out)
    print(ctx.help_text, file=out)


def default_usage(ctx: ResolutionContext, file: TextIO | None = None) -> None:
    out = file if file is not None else sys.stdout
    print("Usage", file=out)
    print_defaults(ctx, file=out)


def usage(ctx: ResolutionContext, file: TextIO | None = None) -> None:
    """Call the context's usage hook, falling back to default_usage."""
    hook = ctx.usage or default_usage
    hook(ctx, file=file)
