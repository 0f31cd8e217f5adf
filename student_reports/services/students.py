"""The students service provides student records from the students API."""

from datetime import date
from functools import wraps
from typing import Any, Dict, Optional
from urllib.parse import quote

import dateutil.parser
import requests
from flask import Flask

from .. import logging
from ..context import get_application_config, get_application_global
from ..domain import Credentials, StudentRecord
from .exceptions import DecodeError, TransportError, UpstreamError

logger = logging.getLogger(__name__)

STUDENT_PATH = '/api/v1/students/{student_id}'
DASHBOARD_PATH = '/api/v1/dashboard'

STRING_FIELDS = {
    'name': 'name',
    'email': 'email',
    'phone': 'phone',
    'gender': 'gender',
    'class_name': 'class',
    'section': 'section',
    'father_name': 'fatherName',
    'father_phone': 'fatherPhone',
    'mother_name': 'motherName',
    'mother_phone': 'motherPhone',
    'guardian_name': 'guardianName',
    'guardian_phone': 'guardianPhone',
    'relation_of_guardian': 'relationOfGuardian',
    'current_address': 'currentAddress',
    'permanent_address': 'permanentAddress',
    'reporter_name': 'reporterName',
}
"""Maps :class:`.StudentRecord` string fields to students API keys."""

DATE_FIELDS = {
    'dob': 'dob',
    'admission_date': 'admissionDate',
}


class StudentsServiceSession(object):
    """
    A session with the students API, on behalf of one caller.

    The credentials are fixed when the session is created. Create a new
    session for each inbound request; never share one between callers.
    """

    def __init__(self, endpoint: str, credentials: Credentials,
                 timeout: float = 30) -> None:
        """Create a new HTTP session."""
        self.endpoint = endpoint.rstrip('/')
        self.credentials = credentials
        self.timeout = timeout
        self._session = requests.Session()
        logger.debug('New StudentsServiceSession for %s with %r',
                     self.endpoint, credentials)

    def _headers(self) -> Dict[str, str]:
        headers = {'Content-Type': 'application/json'}
        if self.credentials.access_token:
            headers['Cookie'] = f'accessToken={self.credentials.access_token}'
        if self.credentials.csrf_token:
            headers['X-CSRF-Token'] = self.credentials.csrf_token
        return headers

    def _get(self, path: str) -> requests.Response:
        url = f'{self.endpoint}{path}'
        try:
            response = self._session.get(url, headers=self._headers(),
                                         timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f'Could not reach {url}: {e}') from e
        if response.status_code != requests.codes.ok:
            logger.debug('Students API responded with status %i',
                         response.status_code)
            raise UpstreamError(response.status_code, response.text)
        return response

    def check_health(self) -> None:
        """
        Check that the students API is reachable, and accepts our credentials.

        Raises
        ------
        :class:`.TransportError`
            If the students API cannot be reached.
        :class:`.UpstreamError`
            If the students API responds with anything other than 200.

        """
        self._get(DASHBOARD_PATH)

    def retrieve_student(self, student_id: str) -> StudentRecord:
        """
        Go get a student record and bring it back.

        Parameters
        ----------
        student_id : str
            Identifier of the student, passed through to the students API
            as a single percent-encoded path segment.

        Returns
        -------
        :class:`.StudentRecord`

        Raises
        ------
        :class:`.TransportError`
            If the students API cannot be reached.
        :class:`.UpstreamError`
            If the students API responds with anything other than 200. The
            status code and the raw body are kept on the exception.
        :class:`.DecodeError`
            If the response body is not a student record.

        """
        logger.debug('Retrieve student with id = %s', student_id)
        path = STUDENT_PATH.format(student_id=quote_segment(student_id))
        response = self._get(path)
        try:
            data = response.json()
        except ValueError as e:
            logger.debug('Student response could not be decoded')
            raise DecodeError('Student response is not JSON') from e
        return to_student(data)


def quote_segment(value: str) -> str:
    """
    Percent-encode ``value`` for use as exactly one URL path segment.

    Reserved characters like ``/``, ``?`` and ``#`` are encoded, and so are
    the dot segments ``.`` and ``..``, which clients would otherwise resolve.
    """
    if value in ('.', '..'):
        return value.replace('.', '%2E')
    return quote(value, safe='')


def _to_date(value: Any, key: str) -> Optional[date]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(f'Expected a timestamp for {key}, got {value!r}')
    try:
        return dateutil.parser.isoparse(value).date()
    except ValueError as e:
        raise DecodeError(f'Malformed timestamp for {key}: {value}') from e


def _to_int(value: Any, key: str) -> int:
    # bool is an int, but not a sensible identifier.
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f'Expected an integer for {key}, got {value!r}')
    return value


def to_student(data: Any) -> StudentRecord:
    """
    Make a :class:`.StudentRecord` from a students API response payload.

    Missing fields take their zero value. Fields of the wrong type make the
    whole payload invalid.
    """
    if not isinstance(data, dict):
        raise DecodeError('Expected a JSON object')
    if 'id' not in data:
        raise DecodeError('Student has no id')
    roll = data.get('roll')
    fields: Dict[str, Any] = {
        'student_id': _to_int(data['id'], 'id'),
        'roll': 0 if roll is None else _to_int(roll, 'roll'),
    }
    system_access = data.get('systemAccess', False)
    if not isinstance(system_access, bool):
        raise DecodeError(f'Expected a boolean for systemAccess, '
                          f'got {system_access!r}')
    fields['system_access'] = system_access
    for field, key in STRING_FIELDS.items():
        value = data.get(key)
        if value is None:
            value = ''
        if not isinstance(value, str):
            raise DecodeError(f'Expected a string for {key}, got {value!r}')
        fields[field] = value
    for field, key in DATE_FIELDS.items():
        fields[field] = _to_date(data.get(key), key)
    return StudentRecord(**fields)


def init_app(app: Flask) -> None:
    """
    Set required configuration defaults for the application.

    Parameters
    ----------
    app : :class:`flask.Flask`
    """
    app.config.setdefault('NODEJS_API_URL', 'http://localhost:5007')
    app.config.setdefault('NODEJS_API_TIMEOUT', 30)


def get_session(credentials: Credentials,
                app: Optional[Flask] = None) -> StudentsServiceSession:
    """
    Create a new students API session for ``credentials``.

    Parameters
    ----------
    credentials : :class:`.Credentials`
    app : :class:`flask.Flask`

    Returns
    -------
    :class:`.StudentsServiceSession`
    """
    config = get_application_config(app)
    endpoint = config.get('NODEJS_API_URL', 'http://localhost:5007')
    timeout = float(config.get('NODEJS_API_TIMEOUT', 30))
    return StudentsServiceSession(endpoint, credentials, timeout=timeout)


def current_session(credentials: Credentials) -> StudentsServiceSession:
    """
    Get the students API session for this request context.

    The session lives on the request-scoped global, so it is never seen by
    another request. It is replaced if it was made for other credentials.

    Parameters
    ----------
    credentials : :class:`.Credentials`

    Returns
    -------
    :class:`.StudentsServiceSession`

    """
    g = get_application_global()
    if g is None:
        return get_session(credentials)
    session = g.get('students')
    if session is None or session.credentials != credentials:
        session = get_session(credentials)
        g.students = session
    return session


@wraps(StudentsServiceSession.retrieve_student)
def retrieve_student(student_id: str,
                     credentials: Credentials) -> StudentRecord:
    """Wrapper for :meth:`StudentsServiceSession.retrieve_student`."""
    return current_session(credentials).retrieve_student(student_id)


@wraps(StudentsServiceSession.check_health)
def check_health(credentials: Credentials) -> None:
    """Wrapper for :meth:`StudentsServiceSession.check_health`."""
    current_session(credentials).check_health()
