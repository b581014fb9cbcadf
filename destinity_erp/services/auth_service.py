# ==============================================================================
# SERVICIO DE AUTENTICACIÓN
# ==============================================================================
# Verifica credenciales y emite el token de sesión.
#
# Correo inexistente y contraseña incorrecta producen EXACTAMENTE el mismo
# error, para no revelar qué correos están registrados.
# ==============================================================================

import logging
from typing import Any, Dict, Optional

from destinity_erp.errors import ServiceError
from destinity_erp.models import EmployeeData, User, USER_TYPE_PROVIDER
from destinity_erp.repositories.interfaces import IUserRepository
from destinity_erp.security import TokenSigner, check_password
from destinity_erp.services.common import require_param

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Credenciales inválidas, correo o contraseña incorrectas"


class AuthService:
    """Inicio de sesión y verificación de tokens."""

    def __init__(self, user_repo: IUserRepository, signer: TokenSigner):
        """
        Args:
            user_repo: Repositorio de usuarios
            signer: Firmador de tokens
        """
        self.user_repo = user_repo
        self.signer = signer

    def login(self, email: Optional[str], password: Optional[str]) -> Dict[str, str]:
        """
        Autentica al usuario.

        Returns:
            {'token': token firmado}

        Raises:
            ServiceError: INVALID_INPUT si falta correo o contraseña,
                NOT_FOUND si las credenciales no son válidas
        """
        require_param(email, 'Correo', 'usuario')
        require_param(password, 'Contraseña', 'usuario')

        user = self.user_repo.find_by_email(email) if isinstance(email, str) else None
        if user is None or not check_password(user.password, password):
            logger.warning("Credenciales inválidas, usuario con correo: %s", email)
            raise ServiceError.not_found(INVALID_CREDENTIALS)

        logger.info("Inicio de sesión: %s", user.id)
        return {'token': self.signer.sign(self.build_claims(user))}

    @staticmethod
    def build_claims(user: User) -> Dict[str, Any]:
        """Claims de identidad del token (sin iat/exp)."""
        if isinstance(user.profile, EmployeeData):
            role = user.profile.role
        else:
            role = USER_TYPE_PROVIDER
        return {
            'sub': user.id,
            'role': role,
            'email': user.email,
            'name': user.full_name,
        }

    def verify_token(self, token: Optional[str]) -> Dict[str, Any]:
        """
        Valida un token emitido por login().

        Raises:
            ServiceError: INVALID_INPUT si falta, está alterado o expiró
        """
        require_param(token, 'Token', 'usuario')
        return self.signer.verify(token)
