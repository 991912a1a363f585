"""
Tag types for config schema definitions.
Used inside Annotated[type, ...] to name the env var and its default.
"""


class Env:
    """Override the environment variable name (default: the field name)."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"Env({self.name!r})"


class Default:
    """Default value used when neither the env var nor the field is set."""

    def __init__(self, value: object):
        self.value = value

    def __repr__(self) -> str:
        return f"Default({self.value!r})"


SKIP = "-"
