"""Server configuration, chosen by mode and overridden from the environment."""

from __future__ import annotations

import dataclasses
import enum
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

MODE_VARIABLE = "TODOLIST_MODE"
_ENV_PREFIX = "todolist_"
_ENV_SEPARATOR = "_"


class Mode(enum.IntEnum):
    DEV = 0
    STG = 1
    PRD = 2


@dataclass(frozen=True)
class Server:
    address: str
    port: int

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 0xFFFFFFFF:
            raise ValueError(f"Invalid port: {self.port}")


@dataclass(frozen=True)
class Postgres:
    username: str
    password: str = field(repr=False)
    address: str
    database: str


@dataclass(frozen=True)
class Security:
    token_version: int

    def __post_init__(self) -> None:
        if not 0 <= self.token_version <= 0xFF:
            raise ValueError(f"Invalid token version: {self.token_version}")


@dataclass(frozen=True)
class Otel:
    grpc_endpoint: str


@dataclass(frozen=True)
class Configuration:
    security: Security
    server: Server
    postgres: Postgres
    otel: Otel


def _dev() -> Configuration:
    password = "password"
    return Configuration(
        security=Security(token_version=0),
        server=Server(address="0.0.0.0", port=8080),
        postgres=Postgres(
            username="todolist",
            password=password,
            address="localhost",
            database="todolist",
        ),
        otel=Otel(grpc_endpoint="http://127.0.0.1:4317"),
    )


_FACTORIES: dict[Mode, Callable[[], Configuration]] = {
    Mode.DEV: _dev,
    Mode.STG: _dev,
    Mode.PRD: _dev,
}


def default_configuration(
    environ: Optional[Mapping[str, str]] = None,
) -> tuple[Configuration, Mode]:
    """Return the built-in configuration for the mode named by TODOLIST_MODE.

    Without the variable, development mode is used when assertions are on.
    """
    environ = os.environ if environ is None else environ
    name = environ.get(MODE_VARIABLE)
    if name is None:
        if __debug__:
            return _dev(), Mode.DEV
        raise RuntimeError(
            f"Unable to use the {MODE_VARIABLE} env var due to: environment variable not found"
        )
    try:
        mode = Mode[name.lower().upper()] if name.lower() in ("dev", "stg", "prd") else None
    except KeyError:
        mode = None
    if mode is None:
        raise ValueError(f"Invalid mode {name}.")
    return _FACTORIES[mode](), mode


def _coerce(key: str, raw: str, current: Any) -> Any:
    if isinstance(current, int):
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"Invalid value for {key}: {raw!r}") from None
    return raw


def load_configuration(
    environ: Optional[Mapping[str, str]] = None,
) -> tuple[Configuration, Mode]:
    """Return the default configuration overridden by TODOLIST_<SECTION>_<FIELD> variables.

    Variable names are split on underscores, so only fields whose names hold
    no underscore can be overridden.
    """
    environ = os.environ if environ is None else environ
    configuration, mode = default_configuration(environ)
    sections = {
        section.name: dataclasses.asdict(getattr(configuration, section.name))
        for section in dataclasses.fields(configuration)
    }
    for key, raw in environ.items():
        lowered = key.lower()
        if not lowered.startswith(_ENV_PREFIX):
            continue
        path = lowered[len(_ENV_PREFIX):].split(_ENV_SEPARATOR)
        if len(path) != 2:
            continue
        section_name, field_name = path
        section = sections.get(section_name)
        if section is None or field_name not in section:
            continue
        section[field_name] = _coerce(key, raw, section[field_name])

    return (
        Configuration(
            security=Security(**sections["security"]),
            server=Server(**sections["server"]),
            postgres=Postgres(**sections["postgres"]),
            otel=Otel(**sections["otel"]),
        ),
        mode,
    )