"""Reports on the health of the service and its upstream."""

from typing import Any, Dict, Tuple

from .. import logging, status
from ..context import get_application_config
from ..domain import Credentials
from ..services import students
from ..services.exceptions import StudentsServiceError

logger = logging.getLogger(__name__)

UPSTREAM_UNAVAILABLE = 'Node.js API unavailable'


def get_health(credentials: Credentials) -> Tuple[Dict[str, Any], int, dict]:
    """
    Check that the students API is reachable with ``credentials``.

    Returns ``200`` if the students API accepted a check request, otherwise
    ``503``. The reason for a failure is only logged.
    """
    service = get_application_config().get('SERVICE_NAME',
                                           'student-report-service')
    try:
        students.check_health(credentials)
    except StudentsServiceError as e:
        logger.warning('Students API health check failed: %s', e)
        return {
            'status': 'unhealthy',
            'service': service,
            'error': UPSTREAM_UNAVAILABLE
        }, status.HTTP_503_SERVICE_UNAVAILABLE, {}
    return {
        'status': 'healthy',
        'service': service,
        'nodejs_api': 'connected'
    }, status.HTTP_200_OK, {}
