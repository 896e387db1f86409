"""
Parseur du format texte des quiz renvoyé par le modèle.

Convention (imposée par le prompt, voir prompts.quiz_prompt) :

    {Question ?} [a) Option A
    b) Option B
    c) Option C
    d) Option D]
    (b)

Parseur heuristique : un segment mal formé est ignoré, jamais d'exception.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from prepal.models.quiz import QuizQuestion

logger = logging.getLogger(__name__)

MAX_OPTIONS = 4

_OPTIONS_RE = re.compile(r"\[([^\]]+)\]")
_ANSWER_RE = re.compile(r"\(([a-d])\)")


@dataclass
class ParseResult:
    questions: List[QuizQuestion] = field(default_factory=list)
    dropped: int = 0


def _parse_segment(segment: str) -> Optional[QuizQuestion]:
    parts = segment.split("}", 1)
    if len(parts) < 2:
        logger.debug("Invalid question format: %r", segment)
        return None

    question_part, options_part = parts
    question = question_part.strip()
    if not question or not options_part:
        logger.debug("Options part is missing for question: %r", question_part)
        return None

    options: List[str] = []
    options_match = _OPTIONS_RE.search(options_part)
    if options_match:
        options = [o.strip() for o in options_match.group(1).split("\n") if o.strip()]

    options = options[:MAX_OPTIONS]

    answer_match = _ANSWER_RE.search(options_part)
    correct = answer_match.group(1) if answer_match else None
    # la lettre doit désigner une option existante
    if correct is not None and ord(correct) - ord("a") >= len(options):
        correct = None

    return QuizQuestion(question=question, options=options, correctAnswer=correct)


def parse_quiz_with_diagnostics(raw: str) -> ParseResult:
    """
    Comme parse_quiz, mais compte aussi les segments contenant un '?'
    qui ont été écartés.
    """
    result = ParseResult()
    if not raw:
        return result

    for segment in raw.split("{"):
        if "?" not in segment:
            continue
        q = _parse_segment(segment)
        if q is None:
            result.dropped += 1
        else:
            result.questions.append(q)

    if result.dropped:
        logger.info("Quiz parsed: %d question(s), %d segment(s) dropped", len(result.questions), result.dropped)
    return result


def parse_quiz(raw: str) -> List[QuizQuestion]:
    return parse_quiz_with_diagnostics(raw).questions


def answer_letter(index: int) -> str:
    return chr(ord("a") + index)


def is_correct(question: QuizQuestion, index: int) -> bool:
    """
    L'option d'index (base 0) `index` est correcte ssi sa lettre est la bonne réponse.
    """
    if index < 0 or question.correctAnswer is None:
        return False
    return question.correctAnswer == answer_letter(index)
