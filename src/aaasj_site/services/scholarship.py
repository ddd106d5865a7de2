"""Scholarship application submission."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from email.utils import formataddr

from aaasj_site.adapters.smtp_mailer import Mailer
from aaasj_site.domain.scholarship import (
    Attachment,
    OutgoingEmail,
    ScholarshipApplication,
    SubmissionResult,
)
from aaasj_site.errors import InvalidRequestError
from aaasj_site.services.application_pdf import (
    APPLICATION_TITLE,
    ESSAY_PROMPTS,
    render_application_pdf,
)

MAX_ESSAY_WORDS = 500
MAX_FILES = 5
MAX_FILE_BYTES = 10 * 1024 * 1024
MAX_TOTAL_UPLOAD_BYTES = 4 * 1024 * 1024
ALLOWED_UPLOAD_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "image/heic",
    }
)
LOGGED_ONLY_MESSAGE_ID = "logged-only"
SMTP_VARIABLES = ("SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASS")

_WORD = re.compile(r"\b\w+\b")

_logger = logging.getLogger(__name__)


def count_words(text: str) -> int:
    """Count word tokens the way the application form does."""
    return len(_WORD.findall(text.strip()))


def validate_application(
    application: ScholarshipApplication,
    uploads: list[Attachment],
    deadline: datetime | None,
    now: datetime,
) -> None:
    """Raise InvalidRequestError when the submission cannot be accepted."""
    if not (application.student_name and application.email and application.phone):
        raise InvalidRequestError("Please fill in all required fields")
    if deadline is not None and now >= deadline:
        raise InvalidRequestError(
            "The application deadline has passed. Submissions are closed."
        )
    essays = (application.question1, application.question2, application.question3)
    if any(count_words(essay) > MAX_ESSAY_WORDS for essay in essays):
        raise InvalidRequestError(
            f"Please keep each essay answer under {MAX_ESSAY_WORDS} words"
        )
    if len(uploads) > MAX_FILES:
        raise InvalidRequestError(f"Please attach at most {MAX_FILES} files")
    for upload in uploads:
        if upload.content_type not in ALLOWED_UPLOAD_TYPES:
            raise InvalidRequestError(f"Unsupported file type: {upload.filename}")
        if upload.size > MAX_FILE_BYTES:
            raise InvalidRequestError(
                f"File too large (> {MAX_FILE_BYTES // (1024 * 1024)}MB): "
                f"{upload.filename}"
            )
    if sum(upload.size for upload in uploads) > MAX_TOTAL_UPLOAD_BYTES:
        raise InvalidRequestError(
            f"Total attachments exceed {MAX_TOTAL_UPLOAD_BYTES // (1024 * 1024)}MB. "
            "Please remove some files."
        )


def build_email_body(application: ScholarshipApplication) -> str:
    """Return the plain-text body of the application email."""
    answers = (application.question1, application.question2, application.question3)
    essays = "".join(
        f"{number}. {prompt}\n{answer}\n\n"
        for number, (prompt, answer) in enumerate(zip(ESSAY_PROMPTS, answers), start=1)
    )
    return (
        "2026 AAASJ Community Service Scholarship Application\n\n"
        "STUDENT PROFILE:\n"
        f"Student Name: {application.student_name}\n"
        f"Address: {application.address}\n"
        f"City: {application.city}\n"
        f"State: {application.state}\n"
        f"Zip: {application.zip}\n"
        f"Email: {application.email}\n"
        f"Phone: {application.phone}\n\n"
        f"Academic Awards/Achievements:\n{application.academic_awards}\n\n"
        f"Volunteer Work/Community Service:\n{application.volunteer_work}\n\n"
        f"Groups/Clubs/Organizations:\n{application.groups_clubs}\n\n"
        "ESSAY QUESTIONS:\n\n"
        f"{essays}"
    )


@dataclass
class ScholarshipService:
    """Validates applications and delivers them to the scholarship inbox."""

    mailer: Mailer | None
    email_to: str
    email_from: str | None
    deadline: datetime | None = None
    missing_settings: list[str] = field(default_factory=list)
    clock: Callable[[], datetime] = lambda: datetime.now(tz=UTC)

    async def submit(
        self,
        application: ScholarshipApplication,
        uploads: list[Attachment],
        generated_pdf: Attachment | None = None,
    ) -> SubmissionResult:
        """Validate, render and email an application."""
        now = self.clock()
        validate_application(application, uploads, _aware(self.deadline), now)
        pdf = generated_pdf or render_application_pdf(application, generated_at=now)
        attachments = [pdf, *uploads]
        body = build_email_body(application)
        _logger.info(
            "Scholarship submission from %s with %s attachments",
            application.student_name,
            len(attachments),
        )

        if self.mailer is None or not self.email_from:
            _logger.warning(
                "SMTP not configured; logging application only",
                extra={"data": {"application": application.__dict__}},
            )
            return SubmissionResult(
                message_id=LOGGED_ONLY_MESSAGE_ID,
                message=(
                    "Application received and logged. Email will be sent when SMTP "
                    "is configured. Missing variables: "
                    f"{', '.join(self.missing_settings)}"
                ),
            )

        display_name = _header_text(application.student_name)
        message = OutgoingEmail(
            sender=formataddr((display_name, self.email_from)),
            to=self.email_to,
            subject=(
                f"2026 AAASJ Scholarship Application - {display_name or 'Applicant'}"
            ),
            text=body,
            reply_to=_header_text(application.email) or None,
            attachments=attachments,
        )
        message_id = await self.mailer.send(message)
        _logger.info("Scholarship email sent: %s", message_id)
        return SubmissionResult(message_id=message_id)

    async def send_test_email(self) -> SubmissionResult:
        """Send a short message to confirm SMTP delivery works."""
        if self.mailer is None or not self.email_from:
            raise InvalidRequestError(
                f"SMTP is not configured. Missing variables: "
                f"{', '.join(self.missing_settings)}"
            )
        message_id = await self.mailer.send(
            OutgoingEmail(
                sender=self.email_from,
                to=self.email_to,
                subject="Test Email from AAASJ Website",
                text=(
                    "This is a test email to verify email delivery is working correctly."
                ),
            )
        )
        return SubmissionResult(
            message_id=message_id, message="Test email sent successfully!"
        )

    def config_status(self) -> dict[str, object]:
        """Report which delivery settings are present."""
        return {
            "isConfigured": self.mailer is not None and bool(self.email_from),
            "variables": {
                name: "MISSING" if name in self.missing_settings else "SET"
                for name in SMTP_VARIABLES
            },
            "emailTo": self.email_to,
            "emailFrom": self.email_from or "MISSING",
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "timestamp": self.clock().isoformat(),
            "title": APPLICATION_TITLE,
        }


def _header_text(value: str) -> str:
    """Collapse whitespace, including line breaks, for use in a mail header."""
    return " ".join(value.split())


def _aware(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)
