from fastapi import APIRouter

from prepal.models.cheatsheet import RenderCheatsheetRequest, RenderCheatsheetResponse
from prepal.models.quiz import ParseQuizRequest, ParseQuizResponse
from prepal.services.cheatsheet import render_cheatsheet
from prepal.services.quiz_parser import parse_quiz_with_diagnostics

router = APIRouter(prefix="/v1/parse", tags=["parse"])


@router.post("/quiz", response_model=ParseQuizResponse)
def parse_quiz_text(body: ParseQuizRequest):
    result = parse_quiz_with_diagnostics(body.text)
    return ParseQuizResponse(questions=result.questions, dropped=result.dropped)


@router.post("/cheatsheet", response_model=RenderCheatsheetResponse)
def render_cheatsheet_text(body: RenderCheatsheetRequest):
    return RenderCheatsheetResponse(sections=render_cheatsheet(body.text, emphasis=body.emphasis))
