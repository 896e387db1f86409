from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from prepal.core.deps import get_generation_service
from prepal.models.files import (
    GenerateTextResponse,
    GenerateQuizResponse,
    GenerateMnemonicsResponse,
)
from prepal.services.generation import GenerationService

router = APIRouter(tags=["generate"])


@router.post("/upload-and-generate", response_model=GenerateTextResponse)
def upload_and_generate(
    file: Optional[UploadFile] = File(None),
    textPrompt: Optional[str] = Form(None),
    service: GenerationService = Depends(get_generation_service),
):
    text = service.cheatsheet(file, textPrompt)
    return GenerateTextResponse(message="Content generated successfully", generatedText=text)


@router.post("/upload-and-generate-quiz", response_model=GenerateQuizResponse)
def upload_and_generate_quiz(
    file: Optional[UploadFile] = File(None),
    textPrompt: Optional[str] = Form(None),
    service: GenerationService = Depends(get_generation_service),
):
    quiz = service.quiz(file, textPrompt)
    return GenerateQuizResponse(
        message="Quiz generated successfully",
        generatedQuiz=quiz.text,
        tempFilePath=str(quiz.temp_file_path),
        originalFileName=quiz.original_file_name,
    )


@router.post("/upload-and-generate-mnemonics", response_model=GenerateMnemonicsResponse)
def upload_and_generate_mnemonics(
    file: Optional[UploadFile] = File(None),
    textPrompt: Optional[str] = Form(None),
    service: GenerationService = Depends(get_generation_service),
):
    text = service.mnemonics(file, textPrompt)
    return GenerateMnemonicsResponse(message="Mnemonics generated successfully", generatedMnemonics=text)
