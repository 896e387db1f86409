from functools import lru_cache

from fastapi import Depends

from prepal.core.config import Settings, get_settings
from prepal.services.feedback import FeedbackService
from prepal.services.generation import GenerationService
from prepal.services.genai_client import GenAIClient
from prepal.services.quiz_session import QuizSessionEngine
from prepal.services.storage import StorageService


def get_settings_dep() -> Settings:
    return get_settings()


@lru_cache
def get_genai_client() -> GenAIClient:
    """
    Client génératif unique, créé au premier usage et jamais réinitialisé.
    """
    settings = get_settings()
    return GenAIClient(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL,
        timeout=settings.OPENAI_TIMEOUT_SECONDS,
    )


@lru_cache
def get_quiz_engine() -> QuizSessionEngine:
    return QuizSessionEngine(ttl_seconds=get_settings().QUIZ_SESSION_TTL_SECONDS)


def get_storage_service(settings: Settings = Depends(get_settings_dep)) -> StorageService:
    """
    Fournit le service de stockage en dépendance (DI).
    """
    return StorageService(
        uploads_path=settings.UPLOADS_PATH,
        temp_path=settings.TEMP_PATH,
        max_upload_mb=settings.MAX_UPLOAD_MB,
    )


def get_generation_service(
    client: GenAIClient = Depends(get_genai_client),
    storage: StorageService = Depends(get_storage_service),
    settings: Settings = Depends(get_settings_dep),
) -> GenerationService:
    return GenerationService(
        client,
        storage,
        max_attempts=settings.UPLOAD_MAX_ATTEMPTS,
        retry_delay=settings.UPLOAD_RETRY_DELAY_SECONDS,
        quiz_questions=settings.DEFAULT_QUIZ_QUESTIONS,
    )


def get_feedback_service(
    client: GenAIClient = Depends(get_genai_client),
    storage: StorageService = Depends(get_storage_service),
    settings: Settings = Depends(get_settings_dep),
) -> FeedbackService:
    return FeedbackService(
        client,
        storage,
        max_attempts=settings.UPLOAD_MAX_ATTEMPTS,
        retry_delay=settings.UPLOAD_RETRY_DELAY_SECONDS,
    )
