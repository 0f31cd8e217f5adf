"""Handles requests for student reports."""

import unicodedata
from typing import Dict, Tuple
from urllib.parse import quote

from werkzeug.exceptions import BadRequest, InternalServerError, NotFound
from werkzeug.http import dump_options_header

from .. import logging, status
from ..domain import Credentials, RenderedDocument
from ..services import render, students
from ..services.exceptions import RenderError, StudentsServiceError, \
    UpstreamError

logger = logging.getLogger(__name__)

MISSING_ID = 'Student ID is required'
NO_SUCH_STUDENT = 'Student not found'
FETCH_FAILED = 'Failed to fetch student data'
RENDER_FAILED = 'Failed to generate PDF report'

Response = Tuple[RenderedDocument, int, Dict[str, str]]


def content_disposition(filename: str) -> str:
    """
    Make an attachment ``Content-Disposition`` value for ``filename``.

    The filename is quoted when it is not a plain token. Names that are not
    printable ASCII get an ASCII fallback, with the exact name in
    ``filename*`` (RFC 6266).
    """
    simple = unicodedata.normalize('NFKD', filename) \
        .encode('ascii', 'ignore').decode('ascii')
    simple = ''.join(c if c.isprintable() else '_' for c in simple)
    options = {'filename': simple}
    if simple != filename:
        options['filename*'] = "UTF-8''" + quote(filename, safe="!#$&+^`|")
    return dump_options_header('attachment', options)


def get_student_report(student_id: str, credentials: Credentials) -> Response:
    """
    Get a PDF report on a student.

    Parameters
    ----------
    student_id : str
        Identifier of the student, as given in the request path. It is not
        interpreted here; the students API decides what is a valid id.
    credentials : :class:`.Credentials`
        Tokens to forward to the students API.

    Returns
    -------
    :class:`.RenderedDocument`
        The report.
    int
        An HTTP status code.
    dict
        Headers to add to the response.

    Raises
    ------
    :class:`werkzeug.exceptions.BadRequest`
        If no student id was given.
    :class:`werkzeug.exceptions.NotFound`
        If the students API has no such student.
    :class:`werkzeug.exceptions.InternalServerError`
        If the student could not be retrieved or the report could not be
        rendered.

    """
    if not student_id:
        logger.error('Report request rejected: no student id')
        raise BadRequest(MISSING_ID)

    try:
        record = students.retrieve_student(student_id, credentials)
    except UpstreamError as e:
        if e.status_code == status.HTTP_404_NOT_FOUND:
            logger.error('Student %s not found: %s', student_id, e.body)
            raise NotFound(NO_SUCH_STUDENT) from e
        logger.error('Error fetching student %s: %s', student_id, e)
        raise InternalServerError(FETCH_FAILED) from e
    except StudentsServiceError as e:
        logger.error('Error fetching student %s: %s', student_id, e)
        raise InternalServerError(FETCH_FAILED) from e

    try:
        document = render.render(record, student_id=student_id)
    except RenderError as e:
        logger.error('Error generating PDF for student %s: %s', student_id, e)
        raise InternalServerError(RENDER_FAILED) from e

    headers = {
        'Content-Type': 'application/pdf',
        'Content-Disposition': content_disposition(document.filename),
        'Content-Length': str(document.content_length)
    }
    logger.info('Generated PDF report for student %s (%i bytes)',
                student_id, document.content_length)
    return document, status.HTTP_200_OK, headers
