"""Score session endpoints.

A session carries one user's answers and derived score state through the
form steps. State lives in Redis and is recomputed on every change.
"""
import logging

from fastapi import APIRouter, HTTPException, status

from app.models import AuditRequest, FormAnswers, MessageResponse, SessionResponse
from app.services import AuditServiceError, get_audit_client, get_session_store
from app.services.session_store import SessionStore, StoredSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/sessions", tags=["Sessions"])


def _to_response(record: StoredSession) -> SessionResponse:
    return SessionResponse(
        id=record.id,
        answers=record.answers.to_raw(),
        state=record.state,
        created_at=record.created_at.isoformat(),
        updated_at=record.updated_at.isoformat(),
    )


def _load_or_404(store: SessionStore, session_id: str) -> StoredSession:
    record = store.load(session_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )
    return record


@router.post(
    "",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Session",
)
async def create_session():
    store = get_session_store()
    return _to_response(store.create())


@router.get("/{session_id}", response_model=SessionResponse, summary="Get Session")
async def get_session(session_id: str):
    store = get_session_store()
    return _to_response(_load_or_404(store, session_id))


@router.put("/{session_id}/answers", response_model=SessionResponse, summary="Update Answers")
async def update_answers(session_id: str, answers: FormAnswers):
    """Replace the session's answers and recompute its scores."""
    store = get_session_store()
    record = _load_or_404(store, session_id)
    session = record.to_session()
    session.update_form_score(answers)
    return _to_response(store.save(record, session))


@router.post(
    "/{session_id}/audit",
    response_model=SessionResponse,
    summary="Run Website Audit",
    responses={502: {"description": "Audit service failed; session keeps form-only scores"}},
)
async def run_audit(session_id: str, request: AuditRequest):
    """Audit the website and blend its score into the session's latest answers.

    On failure the error is stored on the session and 502 is returned; the
    session's form-only score stays usable.
    """
    store = get_session_store()
    _load_or_404(store, session_id)

    try:
        payload = await get_audit_client().check_website_health(request.url)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except AuditServiceError as e:
        # Answers may have changed while the audit ran
        record = _load_or_404(store, session_id)
        session = record.to_session()
        session.set_error(e.message)
        store.save(record, session)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    record = _load_or_404(store, session_id)
    session = record.to_session()
    session.set_website_analysis(payload, session.answers)
    return _to_response(store.save(record, session))


@router.post("/{session_id}/reset", response_model=SessionResponse, summary="Reset Session")
async def reset_session(session_id: str):
    store = get_session_store()
    record = _load_or_404(store, session_id)
    session = record.to_session()
    session.reset()
    return _to_response(store.save(record, session))


@router.delete("/{session_id}", response_model=MessageResponse, summary="Delete Session")
async def delete_session(session_id: str):
    store = get_session_store()
    if not store.delete(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )
    return MessageResponse(message=f"Session {session_id} deleted successfully", id=session_id)
