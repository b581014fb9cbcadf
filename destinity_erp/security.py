# ==============================================================================
# SEGURIDAD - Contraseñas y tokens de sesión
# ==============================================================================
# - Contraseñas: werkzeug.security (hash con sal, nunca texto plano)
# - Tokens: itsdangerous.URLSafeTimedSerializer, firmados con la
#   SECRET_KEY de la aplicación y con expiración
# ==============================================================================

import logging
import time
from typing import Any, Callable, Dict, Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from destinity_erp.errors import ErrorType, ServiceError

logger = logging.getLogger(__name__)

TOKEN_SALT = 'destinity-erp-auth'
TOKEN_INVALID = "Token inválido"
TOKEN_EXPIRED = "El token ha expirado"


def hash_password(password: str) -> str:
    """Genera el hash de una contraseña."""
    return generate_password_hash(password)


def check_password(password_hash: Optional[str], password: Optional[str]) -> bool:
    """
    Verifica una contraseña contra su hash.

    Un hash vacío o con formato desconocido nunca coincide, tampoco una
    contraseña que no sea texto.
    """
    if not password_hash or not isinstance(password, str):
        return False
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        logger.warning("Hash de contraseña con formato desconocido")
        return False


class TokenSigner:
    """
    Firma y verifica tokens de sesión.

    Uso:
        signer = TokenSigner(secret_key, ttl_hours=8)
        token = signer.sign({'sub': user_id, 'role': 'Gerente'})
        claims = signer.verify(token)
    """

    def __init__(
        self,
        secret_key: str,
        ttl_hours: int = 8,
        clock: Callable[[], float] = time.time
    ):
        """
        Args:
            secret_key: Clave de firma
            ttl_hours: Vigencia del token en horas
            clock: Fuente de tiempo (segundos epoch)
        """
        self._serializer = URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)
        self.ttl_seconds = int(ttl_hours * 3600)
        self._clock = clock

    def sign(self, claims: Dict[str, Any]) -> str:
        """
        Firma los claims agregando iat y exp.

        Returns:
            Token firmado (texto seguro para URL)
        """
        issued_at = int(self._clock())
        payload = dict(claims)
        payload['iat'] = issued_at
        payload['exp'] = issued_at + self.ttl_seconds
        return self._serializer.dumps(payload)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Verifica firma y vigencia.

        Raises:
            ServiceError: INVALID_INPUT si la firma no es válida o expiró
        """
        try:
            claims = self._serializer.loads(token, max_age=self.ttl_seconds)
        except SignatureExpired as e:
            raise ServiceError(ErrorType.INVALID_INPUT, TOKEN_EXPIRED, 'token') from e
        except BadSignature as e:
            logger.warning("Token con firma inválida")
            raise ServiceError(ErrorType.INVALID_INPUT, TOKEN_INVALID, 'token') from e

        if claims.get('exp', 0) < int(self._clock()):
            raise ServiceError(ErrorType.INVALID_INPUT, TOKEN_EXPIRED, 'token')
        return claims
