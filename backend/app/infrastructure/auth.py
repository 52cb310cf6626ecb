"""Bearer-token authentication against a configured token table."""

import logging
from collections.abc import Collection, Mapping

from app.domain.entities import Principal
from app.domain.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class StaticTokenAuthenticator:
    """Resolves a bearer token to a Principal.

    Extracting the token from the ``Authorization`` header is left to
    FastAPI's ``HTTPBearer``; this class only knows which tokens exist and
    which principals are admins.
    """

    def __init__(self, tokens: Mapping[str, str], admins: Collection[str] = ()):
        self._tokens = dict(tokens)
        self._admins = frozenset(admins)

    def authenticate(self, token: str) -> Principal:
        principal_id = self._tokens.get(token)
        if principal_id is None:
            logger.info("Rejected unknown bearer token")
            raise AuthenticationError("Invalid or expired token")

        return Principal(id=principal_id, is_admin=principal_id in self._admins)
