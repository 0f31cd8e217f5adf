"""Flask configuration for the student report service."""

import os

SERVICE_NAME = os.environ.get('SERVICE_NAME', 'student-report-service')
"""Name reported by the health endpoint."""

NODEJS_API_URL = os.environ.get('NODEJS_API_URL', 'http://localhost:5007')
"""Base URL of the students API."""

NODEJS_API_TIMEOUT = int(os.environ.get('NODEJS_API_TIMEOUT', '30'))
"""Timeout, in seconds, for a single request to the students API."""

AUTH_MODE = os.environ.get('AUTH_MODE', 'request')
"""
Where upstream credentials come from.

``request`` forwards the tokens found on each inbound request. ``test`` uses
``TEST_ACCESS_TOKEN`` and ``TEST_CSRF_TOKEN`` for every request; dev/test
only.
"""

TEST_ACCESS_TOKEN = os.environ.get('TEST_ACCESS_TOKEN', '')
TEST_CSRF_TOKEN = os.environ.get('TEST_CSRF_TOKEN', '')

ACCESS_TOKEN_COOKIE = os.environ.get('ACCESS_TOKEN_COOKIE', 'accessToken')
CSRF_TOKEN_COOKIE = os.environ.get('CSRF_TOKEN_COOKIE', 'csrfToken')

REPORT_TIMEZONE = os.environ.get('REPORT_TIMEZONE', 'UTC')
REPORT_ATTRIBUTION = os.environ.get('REPORT_ATTRIBUTION',
                                    'Generated by the Student Report Service')

LOGFILE = os.environ.get('LOGFILE')
LOGLEVEL = int(os.environ.get('LOGLEVEL', '20'))

PORT = int(os.environ.get('PORT', '8080'))
