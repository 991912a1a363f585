import io
from dataclasses import dataclass, field
from typing import Annotated

import pytest
from pydantic import BaseModel, Field

from envconfig import (
    Default,
    Env,
    FloatParseError,
    IntParseError,
    load_config,
    parse,
    print_defaults,
    setup,
    usage,
)
from tests.conftest import AnnotatedConfig, ServerConfig


def test_parse_defaults(posix_ctx):
    config = ServerConfig()
    parse(config, posix_ctx)
    assert config.host == "localhost"
    assert config.port == 8080
    assert config.ratio == 0.5
    assert config.debug is False
    assert config.max_retries == 3
    assert config.hosts == []


def test_env_overrides_everything(posix_ctx, environ):
    environ.update({"HOST": "example.org", "PORT": "9000", "RATIO": "1.25", "DEBUG": "T"})
    config = ServerConfig(host="other", port=1)
    parse(config, posix_ctx)
    assert (config.host, config.port, config.ratio, config.debug) == ("example.org", 9000, 1.25, True)


def test_current_values_are_kept(posix_ctx):
    config = ServerConfig(host="other", port=1, ratio=0.25)
    parse(config, posix_ctx)
    assert (config.host, config.port, config.ratio) == ("other", 1, 0.25)


def test_zero_current_value_takes_default(posix_ctx):
    config = ServerConfig(port=0)
    parse(config, posix_ctx)
    assert config.port == 8080


def test_kebab_tags_read_snake_env(environ):
    environ.update({"MAX_RETRIES": "9", "MAX-RETRIES": "1"})
    ctx = setup(kebab_cfg_to_snake_env=True, environ=environ)
    config = ServerConfig()
    parse(config, ctx)
    assert config.max_retries == 9


def test_collections_are_left_alone(posix_ctx, environ):
    environ["HOSTS"] = "x,y"
    config = ServerConfig(hosts=["keep"])
    parse(config, posix_ctx)
    assert config.hosts == ["keep"]


def test_first_parse_error_stops_the_walk(posix_ctx, environ):
    environ.update({"PORT": "abc", "RATIO": "nope"})
    config = ServerConfig(port=5)
    with pytest.raises(IntParseError) as exc:
        parse(config, posix_ctx)
    assert exc.value.field == "port"
    assert config.port == 5
    assert config.host == "localhost"
    assert config.ratio == 0.0


def test_float_error_leaves_field(posix_ctx, environ):
    environ["RATIO"] = "abc"
    config = ServerConfig(ratio=0.75)
    with pytest.raises(FloatParseError):
        parse(config, posix_ctx)
    assert config.ratio == 0.75


def test_parse_rejects_classes_and_plain_objects(ctx):
    with pytest.raises(TypeError):
        parse(ServerConfig, ctx)
    with pytest.raises(TypeError):
        parse(object(), ctx)


def test_help_has_one_stanza_per_resolved_field(posix_ctx):
    parse(ServerConfig(), posix_ctx)
    assert posix_ctx.help_lines == [
        '  $HOST string\n\t(default "localhost")\n',
        '  $PORT int\n\t(default "8080")\n',
        '  $RATIO float64\n\t(default "0.5")\n',
        "  $DEBUG bool\n\n",
        '  $MAX-RETRIES int\n\t(default "3")\n',
    ]


def test_help_uses_windows_marker(environ):
    ctx = setup(environ=environ)
    ctx.platform = "win32"
    parse(ServerConfig(), ctx)
    assert ctx.help_lines[0].startswith("  %HOST% string")


def test_usage_output(posix_ctx, capsys):
    parse(ServerConfig(), posix_ctx)
    usage(posix_ctx)
    out = capsys.readouterr().out
    assert out.startswith("Usage\nEnvironment variables:\n  $HOST string\n")
    assert out.count("  $") == 5


def test_print_defaults_to_file(posix_ctx):
    buf = io.StringIO()
    print_defaults(posix_ctx, file=buf)
    assert buf.getvalue() == "Environment variables:\n\n"


def test_custom_usage_hook(posix_ctx, capsys):
    calls = []
    posix_ctx.usage = lambda c, file=None: calls.append(c)
    usage(posix_ctx)
    assert calls == [posix_ctx]
    assert capsys.readouterr().out == ""


def test_contexts_do_not_share_help(environ):
    a = setup(environ=environ)
    b = setup(environ=environ)
    parse(ServerConfig(), a)
    assert b.help_lines == []


def test_load_config_annotated_defaults(environ):
    config = load_config(AnnotatedConfig, setup(environ=environ))
    assert config.redis_url == "redis://localhost:6379/0"
    assert config.flush_threshold == 1000
    assert config.flush_on_exit is True
    assert config.timeout is None


def test_load_config_env_values(environ):
    environ.update({"FLUSH_ON_EXIT": "0", "TIMEOUT": "2.5", "FLUSH_THRESHOLD": "0"})
    config = load_config(AnnotatedConfig, setup(environ=environ))
    assert config.flush_on_exit is False
    assert config.timeout == 2.5
    assert config.flush_threshold == 0


@dataclass
class NoDefaults:
    name: str = field(metadata={"env": "name"})
    enabled: bool = field(metadata={"env": "enabled"})


def test_load_config_fills_zero_values(environ):
    config = load_config(NoDefaults, setup(environ=environ))
    assert config.name == ""
    assert config.enabled is False


def test_load_config_rejects_non_schema():
    with pytest.raises(TypeError):
        load_config(dict)


class WorkerSettings(BaseModel):
    queue: Annotated[str, Env("WORKER_QUEUE"), Default("jobs")]
    concurrency: int = Field(default=0, json_schema_extra={"env": "worker-concurrency", "default": 4})
    verbose: bool = False


def test_pydantic_model_parse(environ):
    environ["WORKER_CONCURRENCY"] = "16"
    ctx = setup(kebab_cfg_to_snake_env=True, environ=environ)
    settings = load_config(WorkerSettings, ctx)
    assert settings.queue == "jobs"
    assert settings.concurrency == 16
    assert settings.verbose is False


def test_pydantic_instance_parse_in_place(environ):
    environ["VERBOSE"] = "1"
    settings = WorkerSettings(queue="manual")
    parse(settings, setup(environ=environ))
    assert settings.queue == "manual"
    assert settings.concurrency == 4
    assert settings.verbose is True


@dataclass(frozen=True)
class FrozenServer:
    port: int = field(default=0, metadata={"env": "port", "default": "8080"})
    host: str = field(default="", metadata={"env": "host"})


class FrozenSettings(BaseModel, frozen=True):
    queue: Annotated[str, Env("WORKER_QUEUE"), Default("jobs")]
    retries: int = 0


def test_load_config_frozen_dataclass(environ):
    environ["HOST"] = "example.org"
    config = load_config(FrozenServer, setup(environ=environ))
    assert config.port == 8080
    assert config.host == "example.org"


def test_load_config_frozen_pydantic_model(environ):
    environ["RETRIES"] = "2"
    settings = load_config(FrozenSettings, setup(environ=environ))
    assert settings.queue == "jobs"
    assert settings.retries == 2


def test_parse_rejects_frozen_instances(ctx):
    with pytest.raises(TypeError, match="frozen"):
        parse(FrozenServer(), ctx)
    with pytest.raises(TypeError, match="frozen"):
        parse(FrozenSettings(queue="q"), ctx)


@dataclass
class Derived:
    name: str = field(default="", metadata={"env": "name"})
    url: str = field(init=False, metadata={"env": "url", "default": "http://localhost"})


def test_parse_non_init_field_without_value_takes_default(ctx):
    config = Derived()
    parse(config, ctx)
    assert config.url == "http://localhost"


def test_load_config_non_init_field(environ):
    environ["URL"] = "http://example.org"
    config = load_config(Derived, setup(environ=environ))
    assert config.url == "http://example.org"
