from typing import List, Optional
from pydantic import BaseModel, Field


class CheatsheetSubsection(BaseModel):
    subtitle: Optional[str] = None  # None = puces sans sous-thème
    bullets: List[str] = Field(default_factory=list)


class CheatsheetSection(BaseModel):
    title: Optional[str] = None
    subsections: List[CheatsheetSubsection] = Field(default_factory=list)


class RenderCheatsheetRequest(BaseModel):
    text: str
    emphasis: bool = Field(False, description="Convertit **gras** et *italique* en balises HTML")


class RenderCheatsheetResponse(BaseModel):
    sections: List[CheatsheetSection]
