"""Exceptions raised while binding env vars to config fields."""


class ConfigError(Exception):
    """Base class for envconfig failures."""


class ParseError(ConfigError, ValueError):
    """A resolved value could not be parsed into the field's type."""

    kind = "value"

    def __init__(self, field: str, env_var: str, value: str, reason: str = ""):
        self.field = field
        self.env_var = env_var
        self.value = value
        self.reason = reason
        msg = f"{field}: cannot parse {value!r} from ${env_var} as {self.kind}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class IntParseError(ParseError):
    kind = "int"


class FloatParseError(ParseError):
    kind = "float64"
