"""
Unit Tests for Engine Configuration

Run:
    pytest tests/test_config.py -v
"""

import logging

import pytest

from webfft import EngineConfig, FFTEngine, InvalidSizeError, load_config
from webfft.benchmark import DEFAULT_CONFIG
from webfft.config import load_yaml


class TestEngineConfig:

    def test_defaults(self):
        config = EngineConfig()
        assert config.size == 1024
        assert config.level == logging.WARNING

    def test_invalid_size(self):
        with pytest.raises(InvalidSizeError):
            EngineConfig(size=1000)

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            EngineConfig(log_level='LOUD')

    def test_log_level_case_insensitive(self):
        assert EngineConfig(log_level='debug').log_level == 'DEBUG'

    def test_unknown_keys_are_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger='webfft.config'):
            config = EngineConfig.from_dict({'size': 64, 'window': 'hann'})
        assert config.size == 64
        assert "Ignoring unknown engine config key: window" in caplog.text

    def test_to_dict(self):
        assert EngineConfig(size=8).to_dict() == {'size': 8, 'log_level': 'WARNING'}

class TestLoadConfig:

    def test_shipped_default(self):
        config = load_config(str(DEFAULT_CONFIG))
        assert config.size == 1024
        assert load_yaml(str(DEFAULT_CONFIG))['benchmark']['repeats'] > 0

    def test_from_yaml(self, tmp_path):
        path = tmp_path / 'engine.yaml'
        path.write_text("engine:\n  size: 256\n  log_level: INFO\n")
        config = load_config(str(path))
        assert config.size == 256
        assert config.log_level == 'INFO'

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text("")
        assert load_config(str(path)) == EngineConfig()

    def test_invalid_size_in_file(self, tmp_path):
        path = tmp_path / 'bad.yaml'
        path.write_text("engine:\n  size: 12\n")
        with pytest.raises(InvalidSizeError):
            load_config(str(path))

    def test_engine_from_config(self):
        package_logger = logging.getLogger('webfft')
        level_before = package_logger.level
        engine = FFTEngine.from_config(EngineConfig(size=32, log_level='DEBUG'))
        assert engine.size == 32
        assert package_logger.level == level_before
