"""Render scholarship applications as PDF documents."""

from datetime import datetime

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from aaasj_site.domain.scholarship import Attachment, ScholarshipApplication

APPLICATION_TITLE = "2026 AAASJ Community Service Scholarship Application"
ESSAY_PROMPTS = (
    "What do you believe are the most pressing issues or needs in the Asian "
    "American community in South Jersey?",
    "What have you done to help/address these issues/needs?",
    "Please share any past community services, contributions, and achievements "
    "you have made to the Asian American community in South Jersey.",
)
FOOTER_NOTE = (
    "Note: Please attach your most recent high school transcript and this PDF "
    "when emailing your application to scholarship@aaa-sj.org."
)

_MARGIN = 48
_KEY_WIDTH = 90
_FONT = "Helvetica"


def application_filename(application: ScholarshipApplication) -> str:
    """Return the attachment filename for an applicant's PDF."""
    name = " ".join(application.student_name.split()) or "Applicant"
    return f"AAASJ_Scholarship_Application_{name}.pdf"


def render_application_pdf(
    application: ScholarshipApplication, generated_at: datetime
) -> Attachment:
    """Lay out the application on A4 pages and return it as an attachment."""
    pdf = FPDF(orientation="P", unit="pt", format="A4")
    pdf.set_margins(left=_MARGIN, top=_MARGIN, right=_MARGIN)
    pdf.set_auto_page_break(auto=True, margin=_MARGIN)
    pdf.add_page()

    _line(pdf, APPLICATION_TITLE, height=24, style="B", size=18)
    _line(pdf, f"Generated: {generated_at:%Y-%m-%d %H:%M:%S}", height=16, size=10)

    _subheading(pdf, "Student Profile")
    _key_value(pdf, "Student Name", application.student_name)
    _key_value(pdf, "Email", application.email)
    _key_value(pdf, "Phone", application.phone)
    _key_value(pdf, "Address", application.address)
    _key_value(pdf, "City", application.city)
    _key_value(pdf, "State", application.state)
    _key_value(pdf, "Zip", application.zip)
    pdf.ln(8)

    _subheading(pdf, "Academic Awards / Achievements")
    _paragraph(pdf, application.academic_awards)
    _subheading(pdf, "Volunteer Work / Community Service")
    _paragraph(pdf, application.volunteer_work)
    _subheading(pdf, "Groups / Clubs / Organizations")
    _paragraph(pdf, application.groups_clubs)

    _subheading(pdf, "Essay Questions")
    answers = (application.question1, application.question2, application.question3)
    for number, (prompt, answer) in enumerate(zip(ESSAY_PROMPTS, answers), start=1):
        _paragraph(pdf, f"{number}) {prompt}")
        _paragraph(pdf, answer)

    pdf.ln(6)
    _line(pdf, FOOTER_NOTE, height=12, style="I", size=10)

    return Attachment(
        filename=application_filename(application),
        content=bytes(pdf.output()),
        content_type="application/pdf",
    )


def _latin1(text: str) -> str:
    """Core PDF fonts only encode Latin-1; replace anything else."""
    return text.encode("latin-1", "replace").decode("latin-1")


def _line(
    pdf: FPDF, text: str, *, height: float, style: str = "", size: float = 11
) -> None:
    pdf.set_font(_FONT, style=style, size=size)
    pdf.multi_cell(
        w=0, h=height, text=_latin1(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT
    )


def _subheading(pdf: FPDF, text: str) -> None:
    _line(pdf, text, height=18, style="B", size=12)


def _paragraph(pdf: FPDF, text: str) -> None:
    _line(pdf, text or "-", height=14)
    pdf.ln(2)


def _key_value(pdf: FPDF, key: str, value: str) -> None:
    pdf.set_font(_FONT, style="B", size=11)
    pdf.cell(w=_KEY_WIDTH, h=14, text=f"{key}:")
    pdf.set_font(_FONT, size=11)
    pdf.multi_cell(
        w=0, h=14, text=_latin1(value or "-"), new_x=XPos.LMARGIN, new_y=YPos.NEXT
    )
