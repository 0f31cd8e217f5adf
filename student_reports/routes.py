"""Provides routes for the student report service."""

from flask import Blueprint, Response, jsonify, request
from werkzeug.routing import BaseConverter

from . import auth
from .controllers import health, reports

blueprint = Blueprint('reports', __name__, url_prefix='')


class SegmentConverter(BaseConverter):
    """A path segment that may be empty, so that ``//`` reaches the view."""

    regex = '[^/]*'
    part_isolating = True


@blueprint.route('/api/v1/students/<segment:student_id>/report',
                 methods=['GET'])
def student_report(student_id: str) -> Response:
    """Get a PDF report on a student, as a download."""
    credentials = auth.current_credentials(request)
    document, status_code, headers = \
        reports.get_student_report(student_id, credentials)
    return Response(document.content, status=status_code, headers=headers)


@blueprint.route('/health', methods=['GET'])
def health_check() -> tuple:
    """Health check endpoint."""
    credentials = auth.current_credentials(request)
    data, status_code, headers = health.get_health(credentials)
    return jsonify(data), status_code, headers
