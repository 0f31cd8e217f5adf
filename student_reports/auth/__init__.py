"""
Upstream credentials for the student report service.

The service does not authenticate callers itself. It picks up the caller's
access token and CSRF token (see :mod:`.tokens`) and forwards them to the
students API. Which tokens are forwarded is decided by the credential
provider installed on the application (see :mod:`.providers`).
"""

from .providers import CredentialProvider, FixedCredentials, \
    RequestCredentials, current_credentials, init_app
from .tokens import extract_credentials
