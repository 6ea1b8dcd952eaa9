"""
Authorization header builder for static Bearer and Basic credentials.
"""

import base64
from typing import Iterable

from ..schemas.request import AuthState, BasicAuth, BearerAuth
from .variable_substitution import VariableLike, resolve

AUTHORIZATION = "Authorization"


def build_auth_header(
    auth: AuthState,
    variables: Iterable[VariableLike]
) -> tuple[str, str] | None:
    """
    Turn an authentication state into zero or one ``Authorization`` header.

    - bearer: emitted only when the resolved token is non-empty after trimming;
      the trimmed token is sent, as header values cannot carry edge whitespace
    - basic: emitted only when the resolved username is non-empty; both
      resolved fields are encoded as ``base64(username:password)`` in UTF-8
    """
    variables = list(variables)

    if isinstance(auth, BearerAuth):
        token = resolve(auth.token, variables).strip()
        if not token:
            return None
        return AUTHORIZATION, f"Bearer {token}"

    if isinstance(auth, BasicAuth):
        username = resolve(auth.username, variables)
        if not username:
            return None
        password = resolve(auth.password, variables)
        credentials = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
        return AUTHORIZATION, f"Basic {credentials}"

    return None
