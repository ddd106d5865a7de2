"""Tests for scholarship submissions."""

import asyncio
from dataclasses import replace
from datetime import UTC, datetime

import pytest

from aaasj_site.adapters.smtp_mailer import build_email_message
from aaasj_site.domain.scholarship import Attachment, ScholarshipApplication
from aaasj_site.errors import InvalidRequestError
from aaasj_site.services.scholarship import (
    LOGGED_ONLY_MESSAGE_ID,
    MAX_FILE_BYTES,
    ScholarshipService,
    build_email_body,
    count_words,
)
from tests.conftest import FIXED_NOW, FakeMailer

APPLICANT = ScholarshipApplication(
    student_name="Jamie Doe",
    email="jamie@example.com",
    phone="555-0100",
    city="Cherry Hill",
    academic_awards="Honor roll",
    question1="Access to services.",
    question2="Volunteered weekly.",
    question3="Organized a food drive.",
)


def _service(mailer: FakeMailer | None = None, **kwargs) -> ScholarshipService:
    return ScholarshipService(
        mailer=mailer,
        email_to="scholarship@aaa-sj.org",
        email_from="mailer@aaa-sj.org" if mailer else None,
        clock=lambda: FIXED_NOW,
        **kwargs,
    )


def _upload(name: str, size: int, content_type: str = "application/pdf") -> Attachment:
    return Attachment(filename=name, content=b"x" * size, content_type=content_type)


def test_count_words() -> None:
    assert count_words("  one, two-three   four ") == 4
    assert count_words("") == 0


def test_submit_sends_email_with_generated_pdf() -> None:
    mailer = FakeMailer()
    service = _service(mailer)

    result = asyncio.run(
        service.submit(APPLICANT, [_upload("transcript.pdf", 10)])
    )

    assert result.message_id == "<message-1@test>"
    sent = mailer.sent[0]
    assert sent.sender == "Jamie Doe <mailer@aaa-sj.org>"
    assert sent.to == "scholarship@aaa-sj.org"
    assert sent.subject == "2026 AAASJ Scholarship Application - Jamie Doe"
    assert sent.reply_to == "jamie@example.com"
    assert [item.filename for item in sent.attachments] == [
        "AAASJ_Scholarship_Application_Jamie Doe.pdf",
        "transcript.pdf",
    ]
    assert sent.attachments[0].content.startswith(b"%PDF")


def test_submit_uses_client_pdf_when_provided() -> None:
    mailer = FakeMailer()
    client_pdf = Attachment("mine.pdf", b"%PDF-client", "application/pdf")

    asyncio.run(_service(mailer).submit(APPLICANT, [], generated_pdf=client_pdf))

    assert mailer.sent[0].attachments == [client_pdf]


def test_submit_without_smtp_logs_only() -> None:
    service = _service(None, missing_settings=["SMTP_HOST", "SMTP_PASS"])

    result = asyncio.run(service.submit(APPLICANT, []))

    assert result.message_id == LOGGED_ONLY_MESSAGE_ID
    assert result.message is not None
    assert "Missing variables: SMTP_HOST, SMTP_PASS" in result.message


@pytest.mark.parametrize(
    ("application", "uploads", "message"),
    [
        (ScholarshipApplication(student_name="A", email="a@b.c"), [], "required"),
        (
            ScholarshipApplication(
                student_name="A", email="a@b.c", phone="1", question2="word " * 501
            ),
            [],
            "500 words",
        ),
        (APPLICANT, [_upload(f"f{i}.pdf", 1) for i in range(6)], "at most 5"),
        (APPLICANT, [_upload("run.exe", 1, "application/x-msdownload")], "Unsupported"),
        (APPLICANT, [_upload("big.pdf", MAX_FILE_BYTES + 1)], "too large"),
        (
            APPLICANT,
            [_upload("a.pdf", 3 * 1024 * 1024), _upload("b.pdf", 2 * 1024 * 1024)],
            "Total attachments",
        ),
    ],
)
def test_submit_rejects_invalid_input(application, uploads, message) -> None:
    mailer = FakeMailer()

    with pytest.raises(InvalidRequestError, match=message):
        asyncio.run(_service(mailer).submit(application, uploads))

    assert mailer.sent == []


def test_submit_rejects_after_deadline() -> None:
    service = _service(FakeMailer(), deadline=datetime(2025, 8, 1))

    with pytest.raises(InvalidRequestError, match="deadline"):
        asyncio.run(service.submit(APPLICANT, []))


def test_submit_accepts_before_deadline() -> None:
    service = _service(FakeMailer(), deadline=datetime(2025, 12, 1, tzinfo=UTC))

    assert asyncio.run(service.submit(APPLICANT, [])).message_id


def test_email_body_lists_profile_and_essays() -> None:
    body = build_email_body(APPLICANT)

    assert body.startswith("2026 AAASJ Community Service Scholarship Application")
    assert "Student Name: Jamie Doe" in body
    assert "City: Cherry Hill" in body
    assert "Academic Awards/Achievements:\nHonor roll" in body
    assert "3. Please share any past community services" in body
    assert "Organized a food drive." in body


def test_config_status_and_test_email() -> None:
    mailer = FakeMailer()
    service = _service(mailer)

    status = service.config_status()
    result = asyncio.run(service.send_test_email())

    assert status["isConfigured"] is True
    assert status["variables"] == {
        "SMTP_HOST": "SET",
        "SMTP_PORT": "SET",
        "SMTP_USER": "SET",
        "SMTP_PASS": "SET",
    }
    assert result.message_id == "<message-1@test>"
    assert mailer.sent[0].subject == "Test Email from AAASJ Website"


def test_test_email_requires_smtp() -> None:
    service = _service(None, missing_settings=["SMTP_HOST"])

    assert service.config_status()["variables"]["SMTP_HOST"] == "MISSING"
    with pytest.raises(InvalidRequestError, match="SMTP_HOST"):
        asyncio.run(service.send_test_email())


def test_submit_keeps_line_breaks_out_of_mail_headers() -> None:
    mailer = FakeMailer()
    applicant = replace(
        APPLICANT,
        student_name="Jane\r\nBcc: x@evil.test",
        email="jane@example.com\n",
    )

    asyncio.run(_service(mailer).submit(applicant, []))

    sent = mailer.sent[0]
    for header in (sent.sender, sent.subject, sent.reply_to or ""):
        assert "\r" not in header
        assert "\n" not in header
    assert sent.subject == "2026 AAASJ Scholarship Application - Jane Bcc: x@evil.test"
    assert sent.attachments[0].filename == (
        "AAASJ_Scholarship_Application_Jane Bcc: x@evil.test.pdf"
    )
    assert build_email_message(sent)["Bcc"] is None
