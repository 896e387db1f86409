import time
import uuid
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from prepal.core.errors import MissingInput, NotFound
from prepal.models.quiz import (
    QuizQuestion,
    SessionState,
    SessionResponse,
    AnswerResponse,
)
from prepal.services.feedback import FeedbackService
from prepal.services.quiz_parser import parse_quiz, is_correct

logger = logging.getLogger(__name__)


@dataclass
class _Session:
    id: str
    questions: List[QuizQuestion]
    attempts: List[int]
    index: int
    state: SessionState
    created_at: float
    temp_file_path: Optional[str] = None
    original_file_name: Optional[str] = None
    feedback: Optional[List[str]] = field(default=None)
    skipped: int = 0


def _playable(questions: List[QuizQuestion]) -> Tuple[List[QuizQuestion], int]:
    """
    Écarte les questions sans bonne réponse identifiable : aucune option ne
    pourrait les valider et la session resterait bloquée dessus.
    """
    playable = [q for q in questions if q.correctAnswer is not None]
    skipped = len(questions) - len(playable)
    if skipped:
        logger.info("%d question(s) without a valid answer skipped", skipped)
    return playable, skipped


class QuizSessionEngine:
    """
    Sessions de quiz en mémoire.
    Answering(i) --bonne réponse--> Answering(i+1) | Completed ;
    une mauvaise réponse reste sur i (tentatives illimitées).
    """

    def __init__(self, ttl_seconds: int = 60 * 60) -> None:
        self._sessions: Dict[str, _Session] = {}
        self._ttl_seconds = ttl_seconds

    # ---------- public API ----------

    def start(self, raw_quiz: str, temp_file_path: Optional[str] = None, original_file_name: Optional[str] = None) -> SessionResponse:
        self._purge_expired()
        questions, skipped = _playable(parse_quiz(raw_quiz))
        if not questions:
            raise MissingInput("Quiz content is empty or invalid")

        sess = _Session(
            id=f"sess_{uuid.uuid4().hex[:12]}",
            questions=questions,
            attempts=[0] * len(questions),
            index=0,
            state=SessionState.answering,
            created_at=time.time(),
            temp_file_path=temp_file_path,
            original_file_name=original_file_name,
            skipped=skipped,
        )
        self._sessions[sess.id] = sess
        logger.info("Quiz session %s started with %d question(s)", sess.id, len(questions))
        return self._to_response(sess)

    def get(self, session_id: str) -> SessionResponse:
        return self._to_response(self._get_session(session_id))

    def answer(self, session_id: str, choice_index: int) -> AnswerResponse:
        sess = self._get_session(session_id)
        if sess.state == SessionState.completed:
            raise MissingInput("Quiz session is already completed")

        current = sess.questions[sess.index]
        if choice_index < 0 or choice_index >= len(current.options):
            raise MissingInput("Invalid choiceIndex")

        sess.attempts[sess.index] += 1
        attempts = sess.attempts[sess.index]
        correct = is_correct(current, choice_index)

        if correct:
            if sess.index + 1 < len(sess.questions):
                sess.index += 1
            else:
                sess.state = SessionState.completed

        next_q = None
        if correct and sess.state == SessionState.answering:
            next_q = sess.questions[sess.index]

        return AnswerResponse(
            isCorrect=correct,
            attempts=attempts,
            state=sess.state,
            nextIndex=sess.index,
            nextQuestion=next_q,
        )

    def feedback(self, session_id: str, service: FeedbackService) -> List[str]:
        """
        Feedback calculé une seule fois par session, puis servi depuis le cache.
        """
        sess = self._get_session(session_id)
        if sess.state != SessionState.completed:
            raise MissingInput("Quiz session is not completed")
        if sess.feedback is not None:
            return sess.feedback

        questions = [q.question for q in sess.questions]
        # l'upload d'origine est préféré : le sidecar vide uploads/ après usage
        if sess.original_file_name:
            sess.feedback = service.feedback_from_upload(questions, sess.attempts, sess.original_file_name)
        else:
            sess.feedback = service.feedback(questions, sess.attempts, temp_file_path=sess.temp_file_path)
        return sess.feedback

    def practice_more(self, session_id: str, service: FeedbackService) -> SessionResponse:
        sess = self._get_session(session_id)
        if sess.state != SessionState.completed:
            raise MissingInput("Quiz session is not completed")
        if not sess.original_file_name:
            raise MissingInput("Invalid or missing original file name")

        lines = service.more_questions([q.question for q in sess.questions], sess.attempts, sess.original_file_name)
        questions, skipped = _playable(parse_quiz("\n".join(lines)))
        if not questions:
            raise MissingInput("No practice questions could be generated")

        sess.questions = questions
        sess.skipped = skipped
        sess.attempts = [0] * len(questions)
        sess.index = 0
        sess.state = SessionState.answering
        sess.feedback = None
        logger.info("Quiz session %s reset with %d practice question(s)", sess.id, len(questions))
        return self._to_response(sess)

    # ---------- internals ----------

    def _expired(self, sess: _Session) -> bool:
        return time.time() - sess.created_at > self._ttl_seconds

    def _purge_expired(self) -> None:
        for sid in [sid for sid, s in self._sessions.items() if self._expired(s)]:
            self._sessions.pop(sid, None)

    def _get_session(self, session_id: str) -> _Session:
        sess = self._sessions.get(session_id)
        if not sess:
            raise NotFound("Quiz session not found")
        # TTL
        if self._expired(sess):
            self._sessions.pop(session_id, None)
            raise NotFound("Quiz session expired")
        return sess

    def _to_response(self, sess: _Session) -> SessionResponse:
        question = None
        if sess.state == SessionState.answering:
            question = sess.questions[sess.index]
        return SessionResponse(
            sessionId=sess.id,
            state=sess.state,
            index=sess.index,
            total=len(sess.questions),
            attempts=list(sess.attempts),
            skipped=sess.skipped,
            question=question,
        )
