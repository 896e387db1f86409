from typing import List, Optional
from pydantic import BaseModel, Field


class FeedbackRequest(BaseModel):
    questions: List[str] = Field(..., min_length=1)
    attempts: List[int] = Field(..., min_length=1)
    tempFilePath: Optional[str] = None
    originalFileName: Optional[str] = None


class MoreQuestionsRequest(BaseModel):
    questions: List[str] = Field(..., min_length=1)
    attempts: List[int] = Field(..., min_length=1)
    originalFileName: str = Field(..., min_length=1)


class FeedbackResponse(BaseModel):
    feedback: List[str]
