"""Email report endpoint: relays the visibility report to the automation webhook."""
import logging

from fastapi import APIRouter, HTTPException, status

from app.models import ReportRequest, WebhookResponse
from app.scoring.blender import compute_final_score
from app.services import get_report_service, get_session_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/reports", tags=["Reports"])


@router.post(
    "/email",
    response_model=WebhookResponse,
    summary="Send Email Report",
    responses={429: {"description": "Daily report limit reached for this email"}},
)
async def send_email_report(request: ReportRequest):
    """Send the report for a session (or for inline answers).

    With a ``session_id`` the session's answers and final score are used;
    otherwise the score is computed from the request's answers and optional
    audit score. Webhook failures come back as ``success: false``.
    """
    answers = request.answers
    if request.session_id:
        record = get_session_store().load(request.session_id)
        if record is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Session {request.session_id} not found",
            )
        answers = record.answers
        final_score = record.state.final_score
    else:
        final_score = compute_final_score(request.website_score, answers)

    service = get_report_service()
    if request.contact.email and service.limit_reached(request.contact.email):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="The daily limit for email reports has been reached. Please try again tomorrow.",
        )

    result = await service.send_report(request.contact, answers, final_score, request.locale)
    if not result.success:
        logger.warning(f"Email report not sent: {result.message}")
    return result
