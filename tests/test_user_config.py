"""
Tests for user configuration and run-parameter validation.
"""

import json

import pytest

from pdupe.config import DEFAULT_THRESHOLD, DEFAULT_WORKERS
from pdupe.exceptions import ConfigError
from pdupe.user_config import get_user_config
from pdupe.utils.validators import (
    validate_grid,
    validate_metric,
    validate_run_params,
    validate_threshold,
    validate_workers,
)


@pytest.fixture
def user_config(temp_dir, monkeypatch):
    """User config pointed at an empty temporary directory."""
    for var in ('PDUPE_THRESHOLD', 'PDUPE_WORKERS', 'PDUPE_METRIC',
                'PDUPE_GRID_ROWS', 'PDUPE_GRID_COLS'):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv('PDUPE_CONFIG_DIR', str(temp_dir))
    config = get_user_config()
    config.reload()
    yield config
    config.reload()


class TestUserConfig:
    """Test configuration sources and priority."""

    def test_defaults(self, user_config):
        assert user_config.default_threshold == DEFAULT_THRESHOLD
        assert user_config.default_workers == DEFAULT_WORKERS
        assert user_config.default_metric == 'simple'
        assert (user_config.grid_rows, user_config.grid_cols) == (32, 32)

    def test_config_file(self, user_config, temp_dir):
        (temp_dir / 'config.json').write_text(json.dumps({
            'default_threshold': 3.5,
            'default_metric': 'stddev',
        }))
        user_config.reload()
        assert user_config.default_threshold == 3.5
        assert user_config.default_metric == 'stddev'

    def test_env_overrides_file(self, user_config, temp_dir, monkeypatch):
        (temp_dir / 'config.json').write_text(json.dumps({'default_workers': 2}))
        user_config.reload()
        monkeypatch.setenv('PDUPE_WORKERS', '6')
        assert user_config.default_workers == 6

    def test_broken_config_file(self, user_config, temp_dir):
        (temp_dir / 'config.json').write_text("{broken")
        user_config.reload()
        assert user_config.default_threshold == DEFAULT_THRESHOLD

    def test_create_example_config(self, user_config, temp_dir):
        assert user_config.create_example_config()
        data = json.loads((temp_dir / 'config.json').read_text())
        assert data['default_threshold'] == DEFAULT_THRESHOLD
        assert data['grid_rows'] == 32

    def test_parser_uses_config(self, user_config, monkeypatch):
        from pdupe.cli.arg_parser import parse_arguments

        monkeypatch.setenv('PDUPE_THRESHOLD', '7')
        monkeypatch.setenv('PDUPE_GRID_ROWS', '8')
        args = parse_arguments(['/photos'])
        assert args.threshold == 7.0
        assert args.grid == (8, 32)


class TestValidators:
    """Test run-parameter validators."""

    def test_threshold(self):
        assert validate_threshold(0) == (True, "")
        assert validate_threshold("12.5")[0]
        assert not validate_threshold(-0.1)[0]
        assert not validate_threshold("abc")[0]
        assert not validate_threshold(float('nan'))[0]

    def test_workers(self):
        assert validate_workers(1)[0]
        assert not validate_workers(0)[0]
        assert not validate_workers(None)[0]

    def test_grid(self):
        assert validate_grid(32, 32)[0]
        assert validate_grid(1, 2)[0]
        assert not validate_grid(1, 1)[0]
        assert not validate_grid(0, 32)[0]

    def test_metric(self):
        assert validate_metric('prism')[0]
        assert validate_metric('StdDev')[0]
        assert not validate_metric('euclid')[0]

    def test_run_params_first_error(self):
        is_valid, error = validate_run_params(threshold=-1, workers=0)
        assert not is_valid
        assert 'Threshold' in error
        assert validate_run_params(threshold=1, workers=1, rows=4, cols=4, metric='simple') == (True, "")


class TestInvalidValues:
    """Test unusable configuration values."""

    def test_bad_env_value(self, user_config, monkeypatch):
        monkeypatch.setenv('PDUPE_WORKERS', 'abc')
        with pytest.raises(ConfigError, match='PDUPE_WORKERS'):
            user_config.default_workers

    def test_bad_file_value(self, user_config, temp_dir):
        (temp_dir / 'config.json').write_text(json.dumps({'default_threshold': 'loose'}))
        user_config.reload()
        with pytest.raises(ConfigError, match='default_threshold'):
            user_config.default_threshold
