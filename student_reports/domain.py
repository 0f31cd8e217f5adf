"""Defines the core data structures for the student report service."""

from datetime import date
from typing import NamedTuple, Optional

from .logging import mask


class StudentRecord(NamedTuple):
    """A student, as returned by the students API."""

    student_id: int
    name: str = ''
    email: str = ''
    system_access: bool = False

    # Demographics.
    phone: str = ''
    gender: str = ''
    dob: Optional[date] = None

    # Academic placement.
    class_name: str = ''
    section: str = ''
    roll: int = 0
    admission_date: Optional[date] = None

    # Family.
    father_name: str = ''
    father_phone: str = ''
    mother_name: str = ''
    mother_phone: str = ''
    guardian_name: str = ''
    guardian_phone: str = ''
    relation_of_guardian: str = ''

    current_address: str = ''
    permanent_address: str = ''

    reporter_name: str = ''
    """The staff member on whose behalf the report is produced."""


class Credentials(NamedTuple):
    """Tokens forwarded to the students API on behalf of the caller."""

    access_token: str = ''
    csrf_token: str = ''

    def __repr__(self) -> str:
        return (f'Credentials(access_token={mask(self.access_token)!r}, '
                f'csrf_token={mask(self.csrf_token)!r})')


class RenderedDocument(NamedTuple):
    """A rendered PDF report."""

    content: bytes
    filename: str

    @property
    def content_length(self) -> int:
        """Size of the document in bytes."""
        return len(self.content)


def report_filename(student_id: str) -> str:
    """Download filename for the report on ``student_id``."""
    return f'student_{student_id}_report.pdf'
