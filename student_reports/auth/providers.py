"""
Credential providers.

A provider decides which credentials are forwarded to the students API for
an inbound request. The provider is chosen once, when the application is
created, from the ``AUTH_MODE`` configuration parameter:

``request``
    :class:`RequestCredentials` forwards whatever the caller presented.
``test``
    :class:`FixedCredentials` forwards ``TEST_ACCESS_TOKEN`` and
    ``TEST_CSRF_TOKEN`` no matter what the caller presented. For dev/test
    deployments against a students API that we cannot log in to.
"""

from typing import Any, Dict

from flask import Flask, Request, current_app

from ..domain import Credentials
from .. import logging
from .tokens import extract_credentials

logger = logging.getLogger(__name__)

EXTENSION = 'student_reports.credentials'


class CredentialProvider(object):
    """Supplies the credentials to use for an inbound request."""

    def get(self, request: Request) -> Credentials:
        raise NotImplementedError('Implement in a subclass')


class RequestCredentials(CredentialProvider):
    """Forward the tokens presented on the inbound request."""

    def get(self, request: Request) -> Credentials:
        return extract_credentials(request)


class FixedCredentials(CredentialProvider):
    """Forward the same tokens for every request."""

    def __init__(self, access_token: str, csrf_token: str) -> None:
        self.credentials = Credentials(access_token, csrf_token)

    def get(self, request: Request) -> Credentials:
        return self.credentials


def _request_provider(config: Dict[str, Any]) -> CredentialProvider:
    return RequestCredentials()


def _fixed_provider(config: Dict[str, Any]) -> CredentialProvider:
    return FixedCredentials(config['TEST_ACCESS_TOKEN'],
                            config['TEST_CSRF_TOKEN'])


PROVIDERS = {
    'request': _request_provider,
    'test': _fixed_provider,
}


def init_app(app: Flask) -> None:
    """Install the credential provider selected by ``AUTH_MODE``."""
    app.config.setdefault('AUTH_MODE', 'request')
    app.config.setdefault('TEST_ACCESS_TOKEN', '')
    app.config.setdefault('TEST_CSRF_TOKEN', '')
    mode = app.config['AUTH_MODE']
    try:
        factory = PROVIDERS[mode]
    except KeyError as e:
        raise RuntimeError(f'Configuration error: unknown AUTH_MODE {mode}') \
            from e
    if mode != 'request':
        logger.warning('Using fixed %s credentials for all requests', mode)
    app.extensions[EXTENSION] = factory(app.config)


def current_credentials(request: Request) -> Credentials:
    """Get the credentials to forward for ``request``."""
    provider: CredentialProvider = current_app.extensions[EXTENSION]
    return provider.get(request)
