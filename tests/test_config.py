"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from speakable.config import load_config
from speakable.constants import DEFAULT_TTS_MODEL_ID
from speakable.textnorm.quotes import BoundaryPolicy


def test_defaults_when_file_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.yaml", env={})
    assert config.models.tts_id == DEFAULT_TTS_MODEL_ID
    assert config.tts.gpu is True
    assert config.filter.enabled is True
    assert config.filter.boundary_policy is BoundaryPolicy.ALWAYS
    assert config.output.dir == "output"
    assert config.logging.level == "INFO"


def test_yaml_file_overrides_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "models:\n"
        "  tts_id: tts_models/en/vctk/vits\n"
        "filter:\n"
        "  boundary_policy: quotes_only\n"
        "tts:\n"
        "  gpu: false\n",
        encoding="utf-8",
    )
    config = load_config(path, env={})
    assert config.models.tts_id == "tts_models/en/vctk/vits"
    assert config.filter.boundary_policy is BoundaryPolicy.QUOTES_ONLY
    assert config.filter.enabled is True
    assert config.tts.gpu is False


def test_env_overrides_file(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("output:\n  dir: from-file\n", encoding="utf-8")
    env = {
        "SPEAKABLE_OUTPUT_DIR": "from-env",
        "SPEAKABLE_FILTER_ENABLED": "off",
        "SPEAKABLE_FILTER_BOUNDARY_POLICY": " QUOTES_ONLY ",
        "SPEAKABLE_LOGGING_LEVEL": "debug",
    }
    config = load_config(path, env=env)
    assert config.output.dir == "from-env"
    assert config.filter.enabled is False
    assert config.filter.boundary_policy is BoundaryPolicy.QUOTES_ONLY
    assert config.logging.level == "DEBUG"


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path, env={}).filter.enabled is True


def test_invalid_policy_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="filter.boundary_policy"):
        load_config(tmp_path / "missing.yaml", env={"SPEAKABLE_FILTER_BOUNDARY_POLICY": "sometimes"})


def test_invalid_bool_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="SPEAKABLE_TTS_GPU"):
        load_config(tmp_path / "missing.yaml", env={"SPEAKABLE_TTS_GPU": "maybe"})


def test_invalid_log_level_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="logging.level"):
        load_config(tmp_path / "missing.yaml", env={"SPEAKABLE_LOGGING_LEVEL": "chatty"})


def test_empty_model_id_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="models.tts_id"):
        load_config(tmp_path / "missing.yaml", env={"SPEAKABLE_MODELS_TTS_ID": ""})


def test_directory_config_path_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="directory"):
        load_config(tmp_path, env={})


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_config(path, env={})


def test_to_dict_round_trips_values(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.yaml", env={"SPEAKABLE_TTS_GPU": "0"})
    data = config.to_dict()
    assert data["tts"] == {"gpu": False}
    assert data["filter"] == {"enabled": True, "boundary_policy": "always"}
