"""Exceptions raised when talking to the students API or rendering reports."""


class StudentsServiceError(IOError):
    """Base for problems getting data from the students API."""


class TransportError(StudentsServiceError):
    """The students API could not be reached."""


class UpstreamError(StudentsServiceError):
    """The students API responded with something other than 200."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super(UpstreamError, self).__init__(
            f'Students API responded with status {status_code}: {body}'
        )


class DecodeError(StudentsServiceError):
    """The students API responded with data that is not a student."""


class RenderError(RuntimeError):
    """A report could not be rendered."""
