"""
Renders student records as PDF reports.

The layout is fixed: a title block, then the student, academic, family and
address sections as two-column label/value tables, and a footer on every
page with the generation time and the service attribution.
"""

import io
from xml.sax.saxutils import escape
from datetime import date, datetime
from typing import Any, List, Optional, Tuple

from pytz import timezone, UTC
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, \
    TableStyle

from .. import logging
from ..context import get_application_config
from ..domain import RenderedDocument, StudentRecord, report_filename
from .exceptions import RenderError

logger = logging.getLogger(__name__)

MARGIN = 18 * mm
LABEL_WIDTH = 50 * mm
VALUE_WIDTH = A4[0] - 2 * MARGIN - LABEL_WIDTH
EMPTY = '-'
CELL_PADDING = 6
MAX_ROW_HEIGHT = 120

HEADER_COLOR = colors.HexColor('#1F3A5F')
RULE_COLOR = colors.HexColor('#B0BEC5')
LABEL_BACKGROUND = colors.HexColor('#ECEFF1')

Rows = List[Tuple[str, str]]


def format_date(value: Optional[date]) -> str:
    """Format a date like ``August 15, 2005``."""
    if value is None:
        return EMPTY
    return f'{value:%B} {value.day}, {value.year}'


def _text(value: Any) -> str:
    if value is None or value == '':
        return EMPTY
    return str(value)


def sections(record: StudentRecord) -> List[Tuple[str, Rows]]:
    """The report sections for ``record``, in the order they are printed."""
    return [
        ('Student Information', [
            ('Student ID', _text(record.student_id)),
            ('Name', _text(record.name)),
            ('Email', _text(record.email)),
            ('Phone', _text(record.phone)),
            ('Gender', _text(record.gender)),
            ('Date of Birth', format_date(record.dob)),
            ('System Access', 'Yes' if record.system_access else 'No'),
        ]),
        ('Academic Information', [
            ('Class', _text(record.class_name)),
            ('Section', _text(record.section)),
            ('Roll Number', _text(record.roll)),
            ('Admission Date', format_date(record.admission_date)),
        ]),
        ('Family Information', [
            ("Father's Name", _text(record.father_name)),
            ("Father's Phone", _text(record.father_phone)),
            ("Mother's Name", _text(record.mother_name)),
            ("Mother's Phone", _text(record.mother_phone)),
            ("Guardian's Name", _text(record.guardian_name)),
            ("Guardian's Phone", _text(record.guardian_phone)),
            ('Relation', _text(record.relation_of_guardian)),
        ]),
        ('Address Information', [
            ('Current Address', _text(record.current_address)),
            ('Permanent Address', _text(record.permanent_address)),
        ]),
    ]


class ReportBuilder(object):
    """Lays out one report."""

    def __init__(self, record: StudentRecord, generated_at: datetime,
                 attribution: str) -> None:
        self.record = record
        self.generated_at = generated_at
        self.attribution = attribution
        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle('ReportTitle',
                                          parent=styles['Title'],
                                          textColor=HEADER_COLOR)
        self.subtitle_style = ParagraphStyle('ReportSubtitle',
                                             parent=styles['Normal'],
                                             alignment=1, fontSize=12,
                                             leading=15)
        self.heading_style = ParagraphStyle('SectionHeading',
                                            parent=styles['Heading2'],
                                            textColor=HEADER_COLOR,
                                            spaceBefore=10, spaceAfter=4)
        self.cell_style = ParagraphStyle('Cell', parent=styles['Normal'],
                                         fontName='Helvetica', fontSize=10,
                                         leading=12)
        self.label_style = ParagraphStyle('LongLabel', parent=self.cell_style,
                                          fontName='Helvetica-Bold',
                                          backColor=LABEL_BACKGROUND,
                                          borderPadding=CELL_PADDING / 2,
                                          spaceBefore=6, spaceAfter=4)
        self.long_value_style = ParagraphStyle('LongValue',
                                               parent=self.cell_style,
                                               leftIndent=CELL_PADDING,
                                               spaceAfter=6)

    def _table(self, cells: list) -> Table:
        table = Table(cells, colWidths=[LABEL_WIDTH, VALUE_WIDTH])
        table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('BACKGROUND', (0, 0), (0, -1), LABEL_BACKGROUND),
            ('GRID', (0, 0), (-1, -1), 0.5, RULE_COLOR),
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
            ('TOPPADDING', (0, 0), (-1, -1), 4),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ]))
        return table

    def _section(self, rows: Rows) -> list:
        """
        Lay out one section's rows.

        Table rows cannot break across pages, so a value taller than
        ``MAX_ROW_HEIGHT`` closes the current table and is printed below its
        label as running text.
        """
        elements: list = []
        cells: list = []
        for label, value in rows:
            cell = Paragraph(escape(value), self.cell_style)
            _, height = cell.wrap(VALUE_WIDTH - 2 * CELL_PADDING, A4[1])
            if height <= MAX_ROW_HEIGHT:
                cells.append([label, cell])
                continue
            if cells:
                elements.append(self._table(cells))
                cells = []
            elements.append(Paragraph(escape(label), self.label_style))
            elements.append(Paragraph(escape(value), self.long_value_style))
        if cells:
            elements.append(self._table(cells))
        return elements

    def story(self) -> list:
        """The flowables of the report body."""
        elements: list = [
            Paragraph('Student Report', self.title_style),
            Paragraph(escape(_text(self.record.name)), self.subtitle_style),
            Spacer(1, 6 * mm),
        ]
        for heading, rows in sections(self.record):
            elements.append(Paragraph(heading, self.heading_style))
            elements.extend(self._section(rows))
        return elements

    def footer(self, canvas: Canvas, doc: SimpleDocTemplate) -> None:
        """Draw the footer on the current page."""
        stamp = self.generated_at.strftime('%Y-%m-%d %H:%M:%S %Z')
        canvas.saveState()
        canvas.setStrokeColor(RULE_COLOR)
        canvas.line(MARGIN, 14 * mm, A4[0] - MARGIN, 14 * mm)
        canvas.setFont('Helvetica', 8)
        canvas.setFillColor(colors.grey)
        canvas.drawString(MARGIN, 10 * mm, f'Generated on {stamp}')
        if self.record.reporter_name:
            canvas.drawString(MARGIN, 6 * mm,
                              f'Prepared by {self.record.reporter_name}')
        canvas.drawRightString(A4[0] - MARGIN, 10 * mm, self.attribution)
        canvas.drawRightString(A4[0] - MARGIN, 6 * mm,
                               f'Page {doc.page}')
        canvas.restoreState()

    def build(self) -> bytes:
        """Lay out the report and get the PDF bytes."""
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer, pagesize=A4,
            leftMargin=MARGIN, rightMargin=MARGIN,
            topMargin=MARGIN, bottomMargin=MARGIN + 6 * mm,
            title=f'Student Report: {self.record.name}',
            author=self.attribution,
            pageCompression=0
        )
        doc.build(self.story(), onFirstPage=self.footer,
                  onLaterPages=self.footer)
        return buffer.getvalue()


def render(record: StudentRecord, student_id: Optional[str] = None,
           generated_at: Optional[datetime] = None) -> RenderedDocument:
    """
    Render a student record as a PDF report.

    Parameters
    ----------
    record : :class:`.StudentRecord`
    student_id : str
        The identifier the report was requested for, used to name the file.
        Defaults to the record's own id.
    generated_at : :class:`datetime`
        Time printed in the footer. Defaults to now, in ``REPORT_TIMEZONE``.

    Returns
    -------
    :class:`.RenderedDocument`

    Raises
    ------
    :class:`.RenderError`
        If the PDF could not be produced.

    """
    config = get_application_config()
    attribution = config.get('REPORT_ATTRIBUTION',
                             'Generated by the Student Report Service')
    if student_id is None:
        student_id = str(record.student_id)
    try:
        if generated_at is None:
            tz = timezone(config.get('REPORT_TIMEZONE', 'UTC'))
            generated_at = datetime.now(UTC).astimezone(tz)
        content = ReportBuilder(record, generated_at, attribution).build()
    except Exception as e:
        raise RenderError(f'Could not render report: {e}') from e
    logger.debug('Rendered %i bytes for student %s', len(content), student_id)
    return RenderedDocument(content, report_filename(student_id))
