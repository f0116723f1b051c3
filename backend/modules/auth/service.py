"""
Authentication service implementation.

Routes a console sign-in to the right identity source: email addresses
sign in through the federated provider, anything else is checked as an
employee username and adopted as a shadow session.
"""

import logging
from typing import Optional

from modules.employees.interfaces import IEmployeeAuthenticator

from .exceptions import InvalidCredentialsError
from .facade import SessionFacade
from .interfaces import IAuthService

logger = logging.getLogger(__name__)

# Provider messages mapped to what the console shows
_FRIENDLY_MESSAGES = {
    "Invalid login": "Credenciales incorrectas.",
    "rate limit": "Demasiados intentos. Espera unos segundos.",
}


def friendly_message(message: str) -> str:
    """Translate a provider error message into a console message."""
    for fragment, friendly in _FRIENDLY_MESSAGES.items():
        if fragment in message:
            return friendly
    return message


def is_email(identifier: str) -> bool:
    return "@" in identifier


class AuthService(IAuthService):
    """
    Implementation of console sign-in.

    The employee credential check is performed by the database; this
    service only adopts the record it returns.
    """

    def __init__(self, employees: IEmployeeAuthenticator):
        self._employees = employees

    async def sign_in(self, facade: SessionFacade, identifier: str, password: str) -> None:
        identifier = identifier.strip()

        if is_email(identifier):
            try:
                await facade.sign_in_with_password(identifier, password)
            except InvalidCredentialsError as e:
                raise InvalidCredentialsError(friendly_message(e.message)) from e
            return

        record = await self._employees.authenticate(identifier, password)
        if record is None:
            logger.info(f"Rejected employee sign-in for '{identifier}'")
            raise InvalidCredentialsError()

        facade.adopt_shadow_session(record)


# Module-level instance getter
_service_instance: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get the auth service singleton."""
    global _service_instance
    if _service_instance is None:
        from shared.database import get_supabase_client
        from modules.employees.repository import EmployeeRepository
        from modules.employees.service import EmployeeAuthenticator

        _service_instance = AuthService(
            EmployeeAuthenticator(EmployeeRepository(get_supabase_client()))
        )
    return _service_instance


def reset_auth_service() -> None:
    """Reset the auth service singleton (for testing)."""
    global _service_instance
    _service_instance = None
