import os

import pytest

from destinity_erp.config import ConfigError, Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.data_dir == os.path.join(os.getcwd(), 'data')
    assert settings.secret_key
    assert settings.production_mode is False
    assert settings.token_ttl_hours == 8
    assert settings.log_level == 'INFO'
    assert settings.slow_request_ms == 300
    assert settings.port == 5000


def test_values_from_environment():
    settings = Settings.from_env({
        'ERP_DATA_DIR': '/srv/erp',
        'ERP_SECRET_KEY': 'clave',
        'ERP_PRODUCTION_MODE': 'true',
        'ERP_TOKEN_TTL_HOURS': '2',
        'ERP_LOG_LEVEL': 'debug',
        'FLASK_PORT': '8080',
        'FLASK_DEBUG': '1',
    })
    assert settings.data_dir == '/srv/erp'
    assert settings.secret_key == 'clave'
    assert settings.production_mode is True
    assert settings.token_ttl_hours == 2
    assert settings.log_level == 'DEBUG'
    assert settings.port == 8080
    assert settings.debug is True


def test_production_requires_secret():
    with pytest.raises(ConfigError):
        Settings.from_env({'ERP_PRODUCTION_MODE': '1'})


def test_bad_number():
    with pytest.raises(ConfigError):
        Settings.from_env({'FLASK_PORT': 'cinco mil'})
