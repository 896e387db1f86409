from fastapi import APIRouter, Depends

from prepal.core.deps import get_feedback_service, get_quiz_engine
from prepal.models.feedback import FeedbackResponse
from prepal.models.quiz import (
    StartSessionRequest, SessionResponse,
    AnswerRequest, AnswerResponse,
)
from prepal.services.feedback import FeedbackService
from prepal.services.quiz_session import QuizSessionEngine

router = APIRouter(prefix="/v1/quiz/sessions", tags=["quiz"])


@router.post("", response_model=SessionResponse)
def start_session(body: StartSessionRequest, engine: QuizSessionEngine = Depends(get_quiz_engine)):
    return engine.start(body.quiz, temp_file_path=body.tempFilePath, original_file_name=body.originalFileName)

@router.get("/{session_id}", response_model=SessionResponse)
def get_session(session_id: str, engine: QuizSessionEngine = Depends(get_quiz_engine)):
    return engine.get(session_id)

@router.post("/{session_id}/answer", response_model=AnswerResponse)
def answer(session_id: str, body: AnswerRequest, engine: QuizSessionEngine = Depends(get_quiz_engine)):
    return engine.answer(session_id, body.choiceIndex)

@router.post("/{session_id}/feedback", response_model=FeedbackResponse)
def session_feedback(
    session_id: str,
    engine: QuizSessionEngine = Depends(get_quiz_engine),
    service: FeedbackService = Depends(get_feedback_service),
):
    return FeedbackResponse(feedback=engine.feedback(session_id, service))

@router.post("/{session_id}/practice-more", response_model=SessionResponse)
def practice_more(
    session_id: str,
    engine: QuizSessionEngine = Depends(get_quiz_engine),
    service: FeedbackService = Depends(get_feedback_service),
):
    return engine.practice_more(session_id, service)
