"""Application configuration loading and validation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from speakable.constants import DEFAULT_LOG_LEVEL, DEFAULT_OUTPUT_DIR, DEFAULT_TTS_MODEL_ID
from speakable.textnorm.quotes import BoundaryPolicy


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ModelsConfig:
    tts_id: str = DEFAULT_TTS_MODEL_ID


@dataclass(frozen=True)
class TTSConfig:
    gpu: bool = True


@dataclass(frozen=True)
class FilterConfig:
    enabled: bool = True
    boundary_policy: BoundaryPolicy = BoundaryPolicy.ALWAYS


@dataclass(frozen=True)
class OutputConfig:
    dir: str = DEFAULT_OUTPUT_DIR


@dataclass(frozen=True)
class LoggingConfig:
    level: str = DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class AppConfig:
    models: ModelsConfig
    tts: TTSConfig
    filter: FilterConfig
    output: OutputConfig
    logging: LoggingConfig

    def to_dict(self) -> dict[str, Any]:
        return {
            "models": {"tts_id": self.models.tts_id},
            "tts": {"gpu": self.tts.gpu},
            "filter": {
                "enabled": self.filter.enabled,
                "boundary_policy": self.filter.boundary_policy.value,
            },
            "output": {"dir": self.output.dir},
            "logging": {"level": self.logging.level},
        }


def _deep_merge(base: dict[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Layer file or env values over the built-in defaults without mutating either."""
    result = dict(base)
    for key, value in overlay.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _parse_config_file(path: Path | None) -> dict[str, Any]:
    """Read `config.yaml`; a missing or empty file contributes nothing.

    Raises
    ------
    RuntimeError
        If the file exists but PyYAML cannot be imported.
    ValueError
        If the path is a directory or the YAML root is not a mapping.
    """
    if path is None or not path.exists():
        return {}
    if path.is_dir():
        raise ValueError(f"Config path is a directory, expected a file: {path}")

    try:
        import yaml  # type: ignore
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            f"Found {path} but PyYAML is not installed; install speakable's dependencies."
        ) from exc

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"{path} must contain a mapping at the top level.")
    return dict(data)


def _apply_env_overrides(config: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    """Apply `SPEAKABLE_*` variables on top of `config`.

    Booleans accept 1/0, true/false, yes/no, on/off. The boundary policy is
    lowercased and the log level uppercased before validation.
    """
    def _to_str(value: str, _env_key: str) -> str:
        return str(value)

    def _to_lower_str(value: str, _env_key: str) -> str:
        return str(value).strip().lower()

    def _to_upper_str(value: str, _env_key: str) -> str:
        return str(value).strip().upper()

    def _to_bool(value: str, env_key: str) -> bool:
        return _coerce_bool(value, f"env override {env_key}")

    mapping: dict[str, tuple[tuple[str, ...], Any]] = {
        "SPEAKABLE_MODELS_TTS_ID": (("models", "tts_id"), _to_str),
        "SPEAKABLE_TTS_GPU": (("tts", "gpu"), _to_bool),
        "SPEAKABLE_FILTER_ENABLED": (("filter", "enabled"), _to_bool),
        "SPEAKABLE_FILTER_BOUNDARY_POLICY": (("filter", "boundary_policy"), _to_lower_str),
        "SPEAKABLE_OUTPUT_DIR": (("output", "dir"), _to_str),
        "SPEAKABLE_LOGGING_LEVEL": (("logging", "level"), _to_upper_str),
    }

    result = dict(config)
    for env_key, (path, caster) in mapping.items():
        if env_key not in env:
            continue
        section, name = path
        result[section] = dict(result.get(section) or {})
        result[section][name] = caster(env[env_key], env_key)
    return result


def _coerce_bool(value: Any, field: str) -> bool:
    """Convert a YAML or environment value to bool.

    Parameters
    ----------
    value : Any
        Input value; real booleans pass through, strings use on/off spellings.
    field : str
        Field name for error reporting.

    Returns
    -------
    bool
        Converted boolean value.

    Raises
    ------
    ValueError
        If the value is not a recognised boolean spelling.
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"{field} must be a boolean")


def _coerce_policy(value: Any, field: str) -> BoundaryPolicy:
    try:
        return BoundaryPolicy(str(value).strip().lower())
    except ValueError as exc:
        choices = ", ".join(p.value for p in BoundaryPolicy)
        raise ValueError(f"{field} must be one of: {choices}") from exc


def load_config(
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load configuration from defaults, optional file, and environment overrides.

    Parameters
    ----------
    config_path : str | pathlib.Path | None
        Optional path to the YAML config file. If None, `config.yaml` in the
        current working directory is used when present.
    env : Mapping[str, str] | None
        Environment mapping; defaults to `os.environ`.

    Returns
    -------
    AppConfig
        Validated application configuration.

    Raises
    ------
    ValueError
        If any configuration values are invalid.
    RuntimeError
        If YAML parsing is required but unavailable.
    """
    resolved_path = Path(config_path) if config_path else Path.cwd() / "config.yaml"

    defaults = {
        "models": {"tts_id": DEFAULT_TTS_MODEL_ID},
        "tts": {"gpu": True},
        "filter": {"enabled": True, "boundary_policy": BoundaryPolicy.ALWAYS.value},
        "output": {"dir": DEFAULT_OUTPUT_DIR},
        "logging": {"level": DEFAULT_LOG_LEVEL},
    }
    file_data = _parse_config_file(resolved_path)
    merged = _deep_merge(defaults, file_data)
    merged = _apply_env_overrides(merged, os.environ if env is None else env)

    config = AppConfig(
        models=ModelsConfig(tts_id=str(merged["models"]["tts_id"])),
        tts=TTSConfig(gpu=_coerce_bool(merged["tts"]["gpu"], "tts.gpu")),
        filter=FilterConfig(
            enabled=_coerce_bool(merged["filter"]["enabled"], "filter.enabled"),
            boundary_policy=_coerce_policy(merged["filter"]["boundary_policy"], "filter.boundary_policy"),
        ),
        output=OutputConfig(dir=str(merged["output"]["dir"])),
        logging=LoggingConfig(level=str(merged["logging"]["level"]).strip().upper()),
    )

    _validate_config(config)
    return config


def _validate_config(config: AppConfig) -> None:
    """Reject an empty model id or output dir and unknown log level names."""
    if not config.models.tts_id:
        raise ValueError("models.tts_id must be set")
    if not config.output.dir:
        raise ValueError("output.dir must be set")
    if not isinstance(logging.getLevelName(config.logging.level), int):
        raise ValueError(f"logging.level is not a known level: {config.logging.level}")
