import pytest
from unittest.mock import MagicMock

from utils.config_loader import DEFAULT_CONFIG, load_config, merge_config


def test_merge_config_nested():
    merged = merge_config(DEFAULT_CONFIG, {"window_length": 3, "logging": {"level": "DEBUG"}})

    assert merged["window_length"] == 3
    assert merged["logging"]["level"] == "DEBUG"
    assert merged["logging"]["console_json"] is True
    # The defaults themselves are untouched
    assert DEFAULT_CONFIG["logging"]["level"] == "INFO"


def test_load_default_file(tmp_path):
    (tmp_path / "language_model.yaml").write_text("window_length: 4\n", encoding="utf-8")

    config = load_config(config_dir=str(tmp_path))
    assert config["window_length"] == 4
    assert config["fixed_seed"] == DEFAULT_CONFIG["fixed_seed"]


def test_environment_file_takes_precedence(tmp_path):
    (tmp_path / "language_model.yaml").write_text("window_length: 4\n", encoding="utf-8")
    (tmp_path / "language_model_test.yaml").write_text("window_length: 9\n", encoding="utf-8")

    assert load_config(environment="test", config_dir=str(tmp_path))["window_length"] == 9
    assert load_config(environment="production", config_dir=str(tmp_path))["window_length"] == 4


def test_no_file_uses_defaults(tmp_path):
    logger = MagicMock()

    config = load_config(config_dir=str(tmp_path), logger=logger)
    assert config == DEFAULT_CONFIG
    logger.info.assert_called_once()


def test_explicit_path(tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text("fixed_seed: 1\nlogging:\n  console_json: false\n", encoding="utf-8")

    config = load_config(config_path=str(path))
    assert config["fixed_seed"] == 1
    assert config["logging"]["console_json"] is False
    assert config["logging"]["level"] == "INFO"


def test_explicit_path_missing(tmp_path):
    logger = MagicMock()

    with pytest.raises(FileNotFoundError):
        load_config(config_path=str(tmp_path / "missing.yaml"), logger=logger)
    logger.error.assert_called_once()


def test_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(config_path=str(path)) == DEFAULT_CONFIG


def test_non_mapping_file(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ValueError, match="must contain a mapping"):
        load_config(config_path=str(path))


def test_repository_config_loads():
    config = load_config()

    assert config["window_length"] == 7
    assert config["fixed_seed"] == 20
