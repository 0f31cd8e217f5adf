"""Helpers for student report service tests."""

import json
import os
from datetime import date
from typing import Any, Optional
from unittest import mock

from student_reports.domain import StudentRecord

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..',
                           'schema')

STUDENT_DATA = {
    'id': 2,
    'name': 'Alice Johnson',
    'email': 'alice.johnson@school.edu',
    'systemAccess': True,
    'phone': '555-0102',
    'gender': 'Female',
    'dob': '2005-08-15T00:00:00Z',
    'class': 'Grade 10',
    'section': 'A',
    'roll': 2,
    'fatherName': 'Robert Johnson',
    'fatherPhone': '555-0103',
    'motherName': 'Sarah Johnson',
    'motherPhone': '555-0104',
    'guardianName': 'Robert Johnson',
    'guardianPhone': '555-0103',
    'relationOfGuardian': 'Father',
    'currentAddress': '456 Oak Ave, Springfield, IL 62701',
    'permanentAddress': '456 Oak Ave, Springfield, IL 62701',
    'admissionDate': '2020-09-01T00:00:00Z',
    'reporterName': 'Mrs. Smith'
}
"""A student as the students API returns it."""

STUDENT = StudentRecord(
    student_id=2,
    name='Alice Johnson',
    email='alice.johnson@school.edu',
    system_access=True,
    phone='555-0102',
    gender='Female',
    dob=date(2005, 8, 15),
    class_name='Grade 10',
    section='A',
    roll=2,
    admission_date=date(2020, 9, 1),
    father_name='Robert Johnson',
    father_phone='555-0103',
    mother_name='Sarah Johnson',
    mother_phone='555-0104',
    guardian_name='Robert Johnson',
    guardian_phone='555-0103',
    relation_of_guardian='Father',
    current_address='456 Oak Ave, Springfield, IL 62701',
    permanent_address='456 Oak Ave, Springfield, IL 62701',
    reporter_name='Mrs. Smith'
)
"""The same student, decoded."""


def load_schema(name: str) -> dict:
    """Load one of the JSON schemas in ``schema/``."""
    with open(os.path.join(SCHEMA_PATH, f'{name}.json')) as f:
        return json.load(f)


def mock_response(status_code: int = 200, data: Optional[Any] = None,
                  text: Optional[str] = None) -> mock.MagicMock:
    """Make a stand-in for a :class:`requests.Response`."""
    if text is None:
        text = json.dumps(data) if data is not None else ''
    response = mock.MagicMock(status_code=status_code,
                              ok=status_code < 400, text=text)
    if data is None:
        response.json.side_effect = json.decoder.JSONDecodeError('msg',
                                                                 text, 0)
    else:
        response.json.return_value = data
    return response
