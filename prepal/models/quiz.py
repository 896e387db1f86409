from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class QuizQuestion(BaseModel):
    question: str = Field(..., min_length=1, description="Énoncé de la question")
    options: List[str] = Field(default_factory=list, max_length=4, description="Propositions, ordre du texte source")
    correctAnswer: Optional[str] = Field(None, pattern="^[a-d]$", description="Lettre de la bonne réponse")


class ParseQuizRequest(BaseModel):
    text: str


class ParseQuizResponse(BaseModel):
    questions: List[QuizQuestion]
    dropped: int = Field(0, ge=0, description="Segments avec '?' ignorés car mal formés")


class SessionState(str, Enum):
    answering = "answering"
    completed = "completed"


class StartSessionRequest(BaseModel):
    quiz: str = Field(..., description="Texte brut du quiz renvoyé par le modèle")
    tempFilePath: Optional[str] = None
    originalFileName: Optional[str] = None


class SessionResponse(BaseModel):
    sessionId: str
    state: SessionState
    index: int
    total: int
    attempts: List[int]
    skipped: int = Field(0, ge=0, description="Questions écartées faute de bonne réponse valide")
    question: Optional[QuizQuestion] = None


class AnswerRequest(BaseModel):
    choiceIndex: int = Field(..., ge=0)


class AnswerResponse(BaseModel):
    isCorrect: bool
    attempts: int = Field(..., description="Tentatives cumulées sur cette question")
    state: SessionState
    nextIndex: int
    nextQuestion: Optional[QuizQuestion] = None
