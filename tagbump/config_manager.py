"""Layered configuration for tagbump.

Values resolve from, lowest to highest precedence: schema defaults, the TOML
file, a ``.env`` file beside it, then ``TAGBUMP__SECTION__KEY`` variables in
the process environment. Every key remembers the layer that set it so that
validation errors and ``--explain`` can point at the culprit.
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Tuple

from dotenv import dotenv_values
from pydantic import ValidationError

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for Py <3.11
    import tomli as tomllib  # type: ignore[no-redef]

from tagbump.config_schema import Config, DEFAULT_CONFIG

DEFAULT_ENV_PREFIX = "TAGBUMP"
DEFAULT_CONFIG_FILENAME = "tagbump.toml"
DEFAULT_ENV_FILENAME = ".env"


class ConfigError(RuntimeError):
    """Raised when configuration loading or validation fails."""


@dataclass(frozen=True)
class ValueSource:
    """Where a single configuration key got its value."""

    layer: str
    location: str
    variable: str | None = None

    def __str__(self) -> str:
        if self.variable:
            return f"{self.layer} ({self.variable}, {self.location})"
        return f"{self.layer} ({self.location})"


@dataclass
class ConfigMetadata:
    config_path: Path
    env_path: Optional[Path]
    env_prefix: str
    provenance: Dict[str, ValueSource] = field(default_factory=dict)

    def describe_sources(self) -> list[str]:
        env_file = str(self.env_path) if self.env_path else "not found"
        return [
            "defaults: built into tagbump.config_schema",
            f"config file: {self.config_path}",
            f".env file: {env_file}",
            f"environment prefix: {self.env_prefix}__*",
        ]


def _dotted_items(data: Mapping[str, Any], prefix: str = "") -> Iterator[Tuple[str, Any]]:
    for key, value in data.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            yield from _dotted_items(value, dotted)
        else:
            yield dotted, value


def _nest(flat: Mapping[str, Any]) -> Dict[str, Any]:
    tree: Dict[str, Any] = {}
    for dotted, value in flat.items():
        *parents, leaf = dotted.split(".")
        node = tree
        for name in parents:
            child = node.get(name)
            if not isinstance(child, dict):
                child = node[name] = {}
            node = child
        node[leaf] = value
    return tree


def env_key(variable: str, prefix: str) -> str | None:
    """Map ``PREFIX__GIT__REMOTE`` to ``git.remote``; ``None`` for other names."""

    marker = prefix + "__"
    if not variable.startswith(marker):
        return None
    segments = [part.lower() for part in variable[len(marker):].split("__") if part]
    return ".".join(segments) or None


def _read_toml(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _env_overrides(
    variables: Mapping[str, Optional[str]], prefix: str, source: ValueSource
) -> Iterator[Tuple[str, str, ValueSource]]:
    # Raw strings go to pydantic, which converts per field type.
    for variable, raw in variables.items():
        key = env_key(variable, prefix)
        if key is None or raw is None:
            continue
        yield key, raw.strip(), ValueSource(source.layer, source.location, variable)


def _validation_failure(
    error: ValidationError, provenance: Mapping[str, ValueSource]
) -> ConfigError:
    lines = []
    for problem in error.errors():
        key = ".".join(str(part) for part in problem.get("loc", ())) or "<root>"
        line = f"{key}: {problem.get('msg', 'invalid value')}"
        received = problem.get("input")
        if received is not None and not isinstance(received, Mapping):
            line += f" (received={received!r})"
        if key in provenance:
            line += f" [{provenance[key]}]"
        lines.append(line)
    return ConfigError("Configuration validation failed:\n - " + "\n - ".join(lines))


def load_config(
    path: Path | None = None,
    *,
    env_prefix: str = DEFAULT_ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Merge every configuration layer and validate the result.

    An explicit ``path`` must exist; the default ``./tagbump.toml`` is
    optional.
    """

    config_path = path if path else Path.cwd() / DEFAULT_CONFIG_FILENAME
    if path is not None and not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")
    env_path = config_path.parent / DEFAULT_ENV_FILENAME
    runtime_env = os.environ if environ is None else environ

    values: Dict[str, Any] = {}
    provenance: Dict[str, ValueSource] = {}

    file_layers = (
        (ValueSource("defaults", "tagbump.config_schema"), DEFAULT_CONFIG.model_dump()),
        (ValueSource("file", str(config_path)), _read_toml(config_path)),
    )
    for source, data in file_layers:
        for key, value in _dotted_items(data):
            values[key] = value
            provenance[key] = source

    env_layers = [(ValueSource("env", "process"), runtime_env)]
    if env_path.exists():
        env_layers.insert(
            0, (ValueSource("env-file", str(env_path)), dotenv_values(env_path))
        )
    for source, variables in env_layers:
        for key, value, origin in _env_overrides(variables, env_prefix, source):
            values[key] = value
            provenance[key] = origin

    try:
        config = Config.model_validate(_nest(values))
    except ValidationError as exc:
        raise _validation_failure(exc, provenance) from exc
    config._metadata = ConfigMetadata(
        config_path=config_path,
        env_path=env_path if env_path.exists() else None,
        env_prefix=env_prefix,
        provenance=provenance,
    )
    return config


def explain(config: Config, key: str) -> str:
    """Describe the effective value of ``key`` and the layer it came from."""

    metadata: ConfigMetadata | None = getattr(config, "_metadata", None)
    if metadata is None:
        raise ConfigError("Configuration metadata is unavailable")
    flat = dict(_dotted_items(config.model_dump(mode="json")))
    if key not in flat:
        raise ConfigError(f"Unknown configuration key: {key}")
    source = metadata.provenance.get(key)
    return f"{key} = {json.dumps(flat[key])}\nsource: {source or 'unknown'}"


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect tagbump configuration")
    parser.add_argument("--config", type=Path, help="Path to the TOML configuration file")
    parser.add_argument(
        "--env-prefix",
        default=DEFAULT_ENV_PREFIX,
        help="Environment variable prefix (default: %(default)s)",
    )
    actions = parser.add_mutually_exclusive_group(required=True)
    actions.add_argument("--validate", action="store_true", help="Validate the active configuration")
    actions.add_argument("--show-sources", action="store_true", help="List the configuration layers")
    actions.add_argument("--explain", metavar="KEY", help="Show a value and the layer that set it")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config, env_prefix=args.env_prefix)
        if args.explain:
            print(explain(config, args.explain))
        elif args.show_sources:
            print("Active configuration sources:")
            for line in config._metadata.describe_sources():
                print(f"- {line}")
        else:
            print("Configuration OK")
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI entry point
    raise SystemExit(main())
