# ==============================================================================
# CONFIGURACIÓN - Variables de entorno
# ==============================================================================
# ERP_DATA_DIR           Directorio de las colecciones JSON (./data)
# ERP_SECRET_KEY         Clave de firma de tokens. OBLIGATORIA en producción
# ERP_PRODUCTION_MODE    '1' = producción
# ERP_TOKEN_TTL_HOURS    Vigencia del token (8)
# ERP_LOG_LEVEL          Nivel de logging (INFO)
# ERP_SLOW_REQUEST_MS    Umbral de petición lenta en ms (300)
# FLASK_HOST / FLASK_PORT / FLASK_DEBUG
#
# Comando: export ERP_SECRET_KEY="tu_clave_secreta_muy_larga_y_aleatoria"
# ==============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

_DEFAULT_SECRET = "destinity_erp_dev_secret_key_change_in_production"
_TRUE_VALUES = ('1', 'true', 'yes', 'on')


class ConfigError(Exception):
    """Configuración inválida o incompleta."""


def _flag(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in _TRUE_VALUES


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} debe ser un número entero: {raw!r}") from e


@dataclass
class Settings:
    """Configuración de la aplicación."""
    data_dir: str
    secret_key: str
    production_mode: bool = False
    token_ttl_hours: int = 8
    log_level: str = 'INFO'
    slow_request_ms: int = 300
    host: str = '0.0.0.0'
    port: int = 5000
    debug: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'Settings':
        """
        Lee la configuración del entorno.

        Args:
            env: Mapa de variables (por defecto os.environ)

        Raises:
            ConfigError: Si falta ERP_SECRET_KEY en producción o un valor
                numérico no es válido
        """
        if env is None:
            env = os.environ

        production = _flag(env.get('ERP_PRODUCTION_MODE'))
        secret = env.get('ERP_SECRET_KEY')
        if not secret:
            if production:
                raise ConfigError("ERP_PRODUCTION_MODE activo sin ERP_SECRET_KEY definida")
            logger.warning("ERP_SECRET_KEY no definida, usando clave de desarrollo")
            secret = _DEFAULT_SECRET

        return cls(
            data_dir=env.get('ERP_DATA_DIR') or os.path.join(os.getcwd(), 'data'),
            secret_key=secret,
            production_mode=production,
            token_ttl_hours=_int(env, 'ERP_TOKEN_TTL_HOURS', 8),
            log_level=(env.get('ERP_LOG_LEVEL') or 'INFO').upper(),
            slow_request_ms=_int(env, 'ERP_SLOW_REQUEST_MS', 300),
            host=env.get('FLASK_HOST', '0.0.0.0'),
            port=_int(env, 'FLASK_PORT', 5000),
            debug=env.get('FLASK_DEBUG', '0') == '1',
        )
