"""
Student report service.

The student report service is a small Flask application that sits in front of
the students API. Upon request for ``/api/v1/students/<id>/report`` it
retrieves the student record from the students API on behalf of the caller,
renders the record as a PDF document, and returns the document as a file
download.

The service owns no data. Any cookies or auth headers on the inbound request
(see :mod:`student_reports.auth`) are forwarded to the students API, which is
solely responsible for deciding whether the caller may see the record.

Every request builds its own :class:`.StudentsServiceSession`, carrying the
credentials of that request only, so that concurrent requests never share
auth state.
"""
