"""Shared fixtures: every test gets its own environ dict and context."""

from dataclasses import dataclass, field
from typing import Annotated, List, Optional

import pytest

from envconfig import Default, Env, setup


@pytest.fixture
def environ():
    return {}


@pytest.fixture
def ctx(environ):
    return setup(environ=environ)


@pytest.fixture
def posix_ctx(environ):
    c = setup(environ=environ)
    c.platform = "linux"
    return c


@dataclass
class ServerConfig:
    """Schema using dataclass metadata tags."""

    host: str = field(default="", metadata={"env": "host", "default": "localhost"})
    port: int = field(default=0, metadata={"env": "port", "default": "8080"})
    ratio: float = field(default=0.0, metadata={"env": "ratio", "default": "0.5"})
    debug: bool = field(default=False, metadata={"env": "debug"})
    max_retries: int = field(default=0, metadata={"env": "max-retries", "default": "3"})
    hosts: List[str] = field(default_factory=list, metadata={"env": "hosts", "default": "a,b"})


@dataclass
class AnnotatedConfig:
    """Schema using Annotated tags."""

    redis_url: Annotated[str, Env("REDIS_URL"), Default("redis://localhost:6379/0")]
    flush_threshold: Annotated[int, Env("FLUSH_THRESHOLD"), Default(1000)]
    flush_on_exit: Annotated[bool, Env("FLUSH_ON_EXIT"), Default(True)]
    timeout: Annotated[Optional[float], Env("TIMEOUT")] = None
