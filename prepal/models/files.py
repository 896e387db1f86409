from typing import Optional
from pydantic import BaseModel, Field


class FileReference(BaseModel):
    remoteUri: str = Field(..., description="Identifiant du fichier côté service génératif")
    mimeType: str = "application/pdf"
    displayName: str


class DeleteTempFileRequest(BaseModel):
    tempFilePath: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    message: str


class GenerateTextResponse(BaseModel):
    message: str
    generatedText: str


class GenerateQuizResponse(BaseModel):
    message: str
    generatedQuiz: str
    tempFilePath: Optional[str] = None
    originalFileName: Optional[str] = None


class GenerateMnemonicsResponse(BaseModel):
    message: str
    generatedMnemonics: str
