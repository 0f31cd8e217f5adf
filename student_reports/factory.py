"""Provides an app factory for the student report service."""

from typing import Any

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException

from . import auth, logging, routes
from .services import students


def jsonify_exception(error: HTTPException) -> Response:
    """Render an HTTP exception as ``{"error": <description>}``."""
    exc_resp = error.get_response()
    response = jsonify(error=error.description)
    response.status_code = exc_resp.status_code
    return response


def create_app(**config: Any) -> Flask:
    """
    Initialize an instance of the student report service.

    Keyword arguments override values loaded from :mod:`.config`.
    """
    app = Flask('student_reports')
    app.config.from_pyfile('config.py')
    app.config.update(config)

    logging.init_app(app)
    students.init_app(app)
    auth.init_app(app)

    app.url_map.converters['segment'] = routes.SegmentConverter
    app.register_blueprint(routes.blueprint)
    app.errorhandler(HTTPException)(jsonify_exception)
    return app
