"""envconfig: bind dataclass / pydantic fields to environment variables."""

from envconfig.base import (
    default_usage,
    load_config,
    parse,
    print_defaults,
    set_kebab_cfg_to_snake_env,
    set_tag,
    set_tag_default,
    setup,
    usage,
)
from envconfig.context import ResolutionContext
from envconfig.errors import ConfigError, FloatParseError, IntParseError, ParseError
from envconfig.fields import FieldDescriptor, FieldKind
from envconfig.resolver import resolve
from envconfig.tags import Default, Env

__all__ = [
    "setup",
    "set_tag",
    "set_tag_default",
    "set_kebab_cfg_to_snake_env",
    "parse",
    "load_config",
    "print_defaults",
    "default_usage",
    "usage",
    "resolve",
    "ResolutionContext",
    "FieldDescriptor",
    "FieldKind",
    "ConfigError",
    "ParseError",
    "IntParseError",
    "FloatParseError",
    "Env",
    "Default",
]
