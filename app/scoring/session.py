"""Per-user score session.

Holds the latest answers and the derived ``ScoreState`` for one user.
Every update recomputes the whole state from the latest snapshot, so
concurrent writers resolve to last-write-wins.
"""
from typing import Any, Optional

import structlog

from app.models.answers import FormAnswers
from app.models.score import ScoreState
from app.scoring.audit import extract_score_from_response, fallback_audit_data
from app.scoring.blender import blend_scores
from app.scoring.form_score import compute_form_score
from app.scoring.tiers import classify

logger = structlog.get_logger(__name__)


class ScoreSession:
    """Explicit score state for one assessment session.

    Parameters
    ----------
    state:
        Existing state to resume from (e.g. loaded from the session store).
    answers:
        Answers recorded so far.
    """

    def __init__(
        self,
        state: Optional[ScoreState] = None,
        answers: Optional[FormAnswers] = None,
    ) -> None:
        self.state: ScoreState = state or ScoreState()
        self.answers: FormAnswers = answers or FormAnswers()

    def _recompute(
        self,
        website_score: Any,
        audit_data: Optional[dict],
        raw_data: Any,
    ) -> ScoreState:
        form_score = compute_form_score(self.answers)
        blend = blend_scores(website_score, form_score)
        return ScoreState(
            form_score=form_score,
            website_score=blend.website_score,
            final_score=blend.final_score,
            tier=classify(blend.final_score),
            raw_data=raw_data,
            audit_data=audit_data or fallback_audit_data(blend.final_score),
            is_complete=True,
            error=None,
        )

    def set_website_analysis(self, payload: Any, answers: Optional[FormAnswers] = None) -> ScoreState:
        """Record an audit response and recompute all scores."""
        if answers is not None:
            self.answers = answers
        website_score = extract_score_from_response(payload)
        audit_data = payload if isinstance(payload, dict) else None
        self.state = self._recompute(website_score, audit_data, payload)
        logger.info(
            "session_website_analysis_set",
            website_score=self.state.website_score,
            final_score=self.state.final_score,
        )
        return self.state

    def update_form_score(self, answers: FormAnswers) -> ScoreState:
        """Replace the answers and recompute, keeping any audit result."""
        self.answers = answers
        website_score = self.state.website_score if self.state.website_score > 0 else None
        audit_data = self.state.audit_data
        if audit_data and audit_data.get("is_fallback"):
            audit_data = None
        self.state = self._recompute(website_score, audit_data, self.state.raw_data)
        logger.info(
            "session_form_score_updated",
            form_score=self.state.form_score,
            final_score=self.state.final_score,
        )
        return self.state

    def set_error(self, message: str) -> ScoreState:
        """Record an external-service failure; scores stay as they were."""
        self.state = self.state.model_copy(update={"error": message})
        logger.warning("session_error_set", error=message)
        return self.state

    def reset(self) -> ScoreState:
        self.state = ScoreState()
        self.answers = FormAnswers()
        return self.state
