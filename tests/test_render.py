"""Tests for :mod:`student_reports.services.render`."""

from datetime import date, datetime
from unittest import TestCase, mock

import fitz
from flask import Flask
from pytz import timezone, UTC

from student_reports.domain import RenderedDocument, StudentRecord
from student_reports.services import render
from student_reports.services.exceptions import RenderError

from .util import STUDENT

EASTERN = timezone('US/Eastern')


def text_of(document: RenderedDocument) -> str:
    """Get all of the text in a rendered document."""
    with fitz.open(stream=document.content, filetype='pdf') as doc:
        return '\n'.join(page.get_text() for page in doc)


class TestRender(TestCase):
    """:func:`.render.render` makes PDF reports."""

    def test_is_a_pdf(self) -> None:
        """The output is a PDF of reasonable size."""
        document = render.render(STUDENT)
        self.assertEqual(document.content[:4], b'%PDF')
        self.assertGreater(document.content_length, 2000)
        self.assertEqual(document.content_length, len(document.content))
        with fitz.open(stream=document.content, filetype='pdf') as doc:
            self.assertEqual(len(doc), 1)

    def test_filename(self) -> None:
        """The file is named for the requested id."""
        self.assertEqual(render.render(STUDENT).filename,
                         'student_2_report.pdf')
        self.assertEqual(render.render(STUDENT, student_id='0002').filename,
                         'student_0002_report.pdf')

    def test_sections_in_order(self) -> None:
        """The sections appear in a fixed order."""
        text = text_of(render.render(STUDENT))
        self.assertIn('Student Report', text)
        headings = ['Student Information', 'Academic Information',
                    'Family Information', 'Address Information']
        positions = [text.index(heading) for heading in headings]
        self.assertEqual(positions, sorted(positions))

    def test_fields(self) -> None:
        """All of the student's details are in the report."""
        text = text_of(render.render(STUDENT))
        for expected in ['Alice Johnson', 'alice.johnson@school.edu',
                         '555-0102', 'Female', 'August 15, 2005',
                         'Grade 10', 'September 1, 2020', 'Robert Johnson',
                         'Sarah Johnson', '555-0104', 'Father',
                         '456 Oak Ave, Springfield, IL 62701']:
            self.assertIn(expected, text)

    def test_footer(self) -> None:
        """The footer has the time, the reporter, and the attribution."""
        generated_at = EASTERN.localize(datetime(2024, 3, 5, 14, 30, 0))
        text = text_of(render.render(STUDENT, generated_at=generated_at))
        self.assertIn('Generated on 2024-03-05 14:30:00 EST', text)
        self.assertIn('Prepared by Mrs. Smith', text)
        self.assertIn('Generated by the Student Report Service', text)

    def test_footer_uses_config(self) -> None:
        """The timezone and attribution are configurable."""
        app = Flask('test')
        app.config['REPORT_TIMEZONE'] = 'US/Eastern'
        app.config['REPORT_ATTRIBUTION'] = 'Springfield Elementary'
        now = UTC.localize(datetime(2024, 3, 5, 19, 30, 0))
        with app.app_context():
            with mock.patch.object(render, 'datetime') as mock_datetime:
                mock_datetime.now.return_value = now
                text = text_of(render.render(STUDENT))
        self.assertIn('2024-03-05 14:30:00 EST', text)
        self.assertIn('Springfield Elementary', text)

    def test_sparse_record(self) -> None:
        """A record with only an id still renders."""
        document = render.render(StudentRecord(student_id=11))
        self.assertEqual(document.content[:4], b'%PDF')
        text = text_of(document)
        self.assertIn('Address Information', text)
        self.assertNotIn('Prepared by', text)

    def test_markup_in_values(self) -> None:
        """Values are printed literally, never parsed as markup."""
        record = STUDENT._replace(name='Tom & <b>Jerry</b>',
                                  current_address='1 < 2 Lane')
        text = text_of(render.render(record))
        self.assertIn('Tom & <b>Jerry</b>', text)
        self.assertIn('1 < 2 Lane', text)

    def test_long_value_spans_pages(self) -> None:
        """A value longer than a page flows onto the following pages."""
        address = 'Flat 12, Long Street ' * 400
        record = STUDENT._replace(current_address=address)
        document = render.render(record)
        self.assertEqual(document.content[:4], b'%PDF')
        with fitz.open(stream=document.content, filetype='pdf') as doc:
            self.assertGreater(len(doc), 1)
        text = text_of(document)
        self.assertIn('Current Address', text)
        self.assertIn('Permanent Address', text)
        self.assertIn('Page 2', text)
        self.assertEqual(text.count('Flat'), 400)

    def test_long_unbroken_value(self) -> None:
        """A long value with no spaces still renders."""
        record = STUDENT._replace(permanent_address='x' * 20000)
        document = render.render(record)
        self.assertEqual(document.content[:4], b'%PDF')
        with fitz.open(stream=document.content, filetype='pdf') as doc:
            self.assertGreater(len(doc), 1)

    def test_structurally_equivalent(self) -> None:
        """Rendering twice gives the same report, give or take the time."""
        first = text_of(render.render(STUDENT))
        second = text_of(render.render(STUDENT))

        def body(text: str) -> str:
            return '\n'.join(line for line in text.splitlines()
                             if not line.startswith('Generated on'))
        self.assertEqual(body(first), body(second))

    @mock.patch('student_reports.services.render.SimpleDocTemplate')
    def test_render_error(self, mock_doc_template: mock.MagicMock) -> None:
        """Problems in the PDF library become :class:`.RenderError`."""
        mock_doc_template.return_value.build.side_effect = ValueError('bad')
        with self.assertRaises(RenderError):
            render.render(STUDENT)

    def test_unknown_timezone(self) -> None:
        """A bad timezone setting is a render error, not a crash."""
        app = Flask('test')
        app.config['REPORT_TIMEZONE'] = 'Mars/Olympus_Mons'
        with app.app_context():
            with self.assertRaises(RenderError):
                render.render(STUDENT)


class TestFormatDate(TestCase):
    """:func:`.render.format_date` writes calendar dates."""

    def test_format_date(self) -> None:
        """Dates look like ``January 2, 2006``."""
        self.assertEqual(render.format_date(date(2006, 1, 2)),
                         'January 2, 2006')
        self.assertEqual(render.format_date(None), '-')
