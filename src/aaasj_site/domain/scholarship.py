"""Domain models for scholarship applications."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Attachment:
    """A file attached to the outgoing application email."""

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class ScholarshipApplication:
    """Fields submitted through the scholarship application form."""

    student_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    academic_awards: str = ""
    volunteer_work: str = ""
    groups_clubs: str = ""
    question1: str = ""
    question2: str = ""
    question3: str = ""


@dataclass(frozen=True)
class OutgoingEmail:
    """A message ready to hand to a mailer."""

    sender: str
    to: str
    subject: str
    text: str
    reply_to: str | None = None
    attachments: list[Attachment] = field(default_factory=list)


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a scholarship submission."""

    message_id: str
    message: str | None = None
