"""Scholarship application routes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse

from aaasj_site.api.auth import require_user
from aaasj_site.domain.scholarship import Attachment, ScholarshipApplication
from aaasj_site.errors import MailDeliveryError
from aaasj_site.services.application_pdf import application_filename

if TYPE_CHECKING:
    from aaasj_site.containers import AppContainer

router = APIRouter(prefix="/api/scholarship", tags=["scholarship"])

_logger = logging.getLogger(__name__)


async def _to_attachment(upload: UploadFile, default_name: str) -> Attachment:
    return Attachment(
        filename=upload.filename or default_name,
        content=await upload.read(),
        content_type=upload.content_type,
    )


@router.post("/submit")
async def submit(  # noqa: PLR0913
    request: Request,
    student_name: str = Form("", alias="studentName"),
    email: str = Form(""),
    phone: str = Form(""),
    address: str = Form(""),
    city: str = Form(""),
    state: str = Form(""),
    zip_code: str = Form("", alias="zip"),
    academic_awards: str = Form("", alias="academicAwards"),
    volunteer_work: str = Form("", alias="volunteerWork"),
    groups_clubs: str = Form("", alias="groupsClubs"),
    question1: str = Form(""),
    question2: str = Form(""),
    question3: str = Form(""),
    generated_pdf: UploadFile | None = File(None, alias="generatedPdf"),
    files: list[UploadFile] | None = File(None),
) -> JSONResponse:
    """Accept a scholarship application and email it to the committee."""
    container: AppContainer = request.app.state.container
    application = ScholarshipApplication(
        student_name=student_name.strip(),
        email=email.strip(),
        phone=phone.strip(),
        address=address,
        city=city,
        state=state,
        zip=zip_code,
        academic_awards=academic_awards,
        volunteer_work=volunteer_work,
        groups_clubs=groups_clubs,
        question1=question1,
        question2=question2,
        question3=question3,
    )
    uploads = [
        await _to_attachment(upload, f"attachment-{index}")
        for index, upload in enumerate(files or [], start=1)
    ]
    pdf = None
    if generated_pdf is not None:
        pdf = await _to_attachment(generated_pdf, application_filename(application))
    try:
        result = await container.scholarship_service.submit(
            application, uploads, generated_pdf=pdf
        )
    except MailDeliveryError as exc:
        _logger.exception("Scholarship email failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": exc.message},
        )
    content: dict[str, object] = {"ok": True, "messageId": result.message_id}
    if result.message:
        content["message"] = result.message
    return JSONResponse(content=content)


@router.get("/debug", dependencies=[Depends(require_user)])
async def debug(request: Request) -> dict[str, object]:
    """Report which mail settings are configured."""
    container: AppContainer = request.app.state.container
    return container.scholarship_service.config_status()


@router.post("/test", dependencies=[Depends(require_user)])
async def send_test(request: Request) -> dict[str, object]:
    """Send a test message to the scholarship inbox."""
    container: AppContainer = request.app.state.container
    result = await container.scholarship_service.send_test_email()
    return {"ok": True, "messageId": result.message_id, "message": result.message}
