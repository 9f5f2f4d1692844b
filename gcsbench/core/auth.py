"""Authorized HTTP transport for the storage APIs.

Credentials come from Application Default Credentials. The returned
``AuthorizedSession`` attaches a bearer token to every request and refreshes
it before expiry, so callers never handle tokens directly.
"""

import logging

import google.auth
from google.auth.exceptions import DefaultCredentialsError
from google.auth.transport.requests import AuthorizedSession

from gcsbench.core.const import STORAGE_SCOPE_FULL_CONTROL
from gcsbench.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def build_authorized_session() -> AuthorizedSession:
    """Create a requests session authorized with default credentials.

    Returns:
        A ``requests.Session`` subclass that signs every request.

    Raises:
        AuthenticationError: If no default credentials are available.
    """
    try:
        credentials, project_id = google.auth.default(
            scopes=[STORAGE_SCOPE_FULL_CONTROL]
        )
    except DefaultCredentialsError as exc:
        raise AuthenticationError(f"Failed to load the credentials: {exc}") from exc

    logger.debug("Loaded default credentials for project %s", project_id)
    return AuthorizedSession(credentials)
