"""
Field resolution: pick the string a field should be set to.

Precedence is fixed: environment variable, then the field's current value,
then the declared default.
"""

import json
from typing import Any

from envconfig.context import ResolutionContext
from envconfig.fields import FieldDescriptor, FieldKind
from envconfig.formatting import format_bool, format_float, format_int
from envconfig.logger import get_resolver_logger

logger = get_resolver_logger()


def env_var_name(tag: str, ctx: ResolutionContext) -> str:
    """Upper-case the tag; with kebab_cfg_to_snake_env, max-retries -> MAX_RETRIES."""
    name = tag.upper()
    if ctx.kebab_cfg_to_snake_env:
        name = name.replace("-", "_")
    return name


def display_name(name: str, ctx: ResolutionContext) -> str:
    if ctx.is_windows:
        return f"%{name}%"
    return f"${name}"


def help_stanza(name: str, type_tag: str, default: str, ctx: ResolutionContext) -> str:
    marker = display_name(name, ctx)
    if default:
        return f"  {marker} {type_tag}\n\t(default {json.dumps(default, ensure_ascii=False)})\n"
    return f"  {marker} {type_tag}\n\n"


def format_current(kind: FieldKind, value: Any) -> tuple[str, bool]:
    """
    Text form of a field's current value and whether it counts as set.

    Numbers equal to zero count as unset, so a configured 0 falls through
    to the default.
    """
    if value is None:
        return "", False
    if kind is FieldKind.BOOL:
        return format_bool(value), True
    if kind is FieldKind.STRING:
        text = str(value)
        return text, text != ""
    if kind is FieldKind.INT:
        text = format_int(value)
        return text, text != "0"
    if kind is FieldKind.FLOAT:
        text = format_float(value)
        return text, text != "0"
    return "", False


def resolve(descriptor: FieldDescriptor, current: Any, ctx: ResolutionContext) -> str:
    """
    Resolve the string value for one field.

    Always appends a help stanza to ctx.help_lines, whatever the outcome.
    An env var that is set to "" still wins over the other sources.
    """
    name = env_var_name(descriptor.tag, ctx)
    ctx.help_lines.append(help_stanza(name, descriptor.kind.type_tag, descriptor.default, ctx))

    value: str | None = ctx.environ.get(name)
    if value is not None:
        logger.debug(f"{descriptor.name}: using ${name}")
        return value

    text, present = format_current(descriptor.kind, current)
    if present:
        logger.debug(f"{descriptor.name}: keeping current value {text!r}")
        return text

    logger.debug(f"{descriptor.name}: using default {descriptor.default!r}")
    return descriptor.default
