"""
Print the environment variables a config schema reads.

    python -m envconfig myapp.settings:AppConfig --kebab --show
"""

import argparse
import importlib
import sys

from envconfig.base import load_config, setup, usage
from envconfig.env import environ_with_dotenv
from envconfig.errors import ParseError
from envconfig.fields import describe_fields
from envconfig.resolver import env_var_name


def import_schema(target: str):
    """Import "package.module:ClassName"."""
    module_name, sep, attr = target.partition(":")
    if not sep or not attr:
        raise ValueError(f"expected module:ClassName, got {target!r}")
    module = importlib.import_module(module_name)
    return getattr(module, attr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="envconfig", description="Show the env vars a config schema reads")
    parser.add_argument("schema", help="module:ClassName of a dataclass or pydantic model")
    parser.add_argument("--tag", default="env", help="metadata key naming the env var")
    parser.add_argument("--tag-default", default="default", help="metadata key holding the default")
    parser.add_argument("--kebab", action="store_true", help="map kebab-case tags to SNAKE_CASE env vars")
    parser.add_argument("--prefix", default="", help="prefix joined to every tag")
    parser.add_argument("--dotenv", default=None, help="read this .env file as well")
    parser.add_argument("--show", action="store_true", help="also print the resolved values")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    environ = environ_with_dotenv(args.dotenv) if args.dotenv else None
    ctx = setup(args.tag, args.tag_default, args.kebab, prefix=args.prefix, environ=environ)

    try:
        schema = import_schema(args.schema)
        config = load_config(schema, ctx)
    except ParseError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except (ImportError, AttributeError, ValueError, TypeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    usage(ctx)
    if args.show:
        for descriptor in describe_fields(schema, ctx):
            name = env_var_name(descriptor.tag, ctx)
            print(f"{name}={getattr(config, descriptor.name)!r}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
