import logging

from fastapi import APIRouter, Depends

from prepal.core.deps import get_feedback_service
from prepal.models.feedback import FeedbackRequest, FeedbackResponse, MoreQuestionsRequest
from prepal.services.feedback import FeedbackService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["feedback"])


@router.post("/get-feedback", response_model=FeedbackResponse)
def get_feedback(body: FeedbackRequest, service: FeedbackService = Depends(get_feedback_service)):
    logger.info("Received get-feedback request (%d questions)", len(body.questions))
    lines = service.feedback(
        body.questions,
        body.attempts,
        temp_file_path=body.tempFilePath,
        original_file_name=body.originalFileName,
    )
    return FeedbackResponse(feedback=lines)


@router.post("/get-morequestions", response_model=FeedbackResponse)
def get_more_questions(body: MoreQuestionsRequest, service: FeedbackService = Depends(get_feedback_service)):
    lines = service.more_questions(body.questions, body.attempts, body.originalFileName)
    return FeedbackResponse(feedback=lines)
