from typing import List, Optional, Tuple

Struggled = List[Tuple[str, int]]

QUIZ_FORMAT = (
    "Each question should be enclosed in curly brackets {}. "
    "List the four options within square brackets [], with each option labeled with a), b), c), and d) "
    "on a new line using \\n to separate them. "
    "Place the correct option in parentheses () as a letter (a, b, c, or d) on a new line after the options. "
    "Ensure the output strictly follows this format: "
    "{Question text} [a) Option A\\nb) Option B\\nc) Option C\\nd) Option D] \\n(Correct option letter). "
    "Please use this format exactly as described."
)

CHEATSHEET_FORMAT = (
    "Put the main title of each section in curly brackets {} on its own line. "
    "Put each subtopic in square brackets [] on its own line. "
    "List the key points under each subtopic as lines starting with '- '. "
    "Separate sections with a blank line. Do not use any other formatting."
)

MNEMONICS_FORMAT = (
    "Use the same layout: section titles in curly brackets {}, subtopics in square brackets [], "
    "points as lines starting with '- ', sections separated by a blank line. "
    "You may use **bold** and *italic* to highlight the letters or words to memorize."
)


def _with_extra(base: str, extra: Optional[str]) -> str:
    extra = (extra or "").strip()
    if not extra:
        return base
    return f"{base}\n\nAdditional instructions from the student: {extra}"


def cheatsheet_prompt(extra: Optional[str] = None) -> str:
    base = (
        "Please create a cheat sheet based on the provided document. "
        "Keep it concise and focused on the key concepts a student needs to revise. "
        + CHEATSHEET_FORMAT
    )
    return _with_extra(base, extra)


def quiz_prompt(num_questions: int = 5, extra: Optional[str] = None) -> str:
    base = f"Generate {num_questions} multiple-choice questions based on the document provided. " + QUIZ_FORMAT
    return _with_extra(base, extra)


def mnemonics_prompt(request: str) -> str:
    return f"{request.strip()}\n\n{MNEMONICS_FORMAT}"


def _struggled_lines(struggled: Struggled) -> str:
    return "\n".join(f'Question: "{q}" ({n} attempts)' for q, n in struggled)


def feedback_prompt(struggled: Struggled, file_content: Optional[str] = None) -> str:
    """
    Sans `file_content`, le document est joint à l'appel (référence de fichier).
    """
    if file_content is not None:
        head = (
            "Given the following file content on which the quiz questions are based:\n\n"
            f"{file_content}\n\n"
            "Provide feedback summary for these quiz questions where the user took more than one attempt "
            "and refer to the file content to provide the feedback:"
        )
    else:
        head = (
            "Provide feedback summary for these quiz questions where the user took more than one attempt "
            "and refer to the attached document to provide the feedback:"
        )
    return f"{head}\n{_struggled_lines(struggled)}"


def more_questions_prompt(struggled: Struggled) -> str:
    return (
        "Generate new multiple-choice questions based on the areas where the user struggled in the previous quiz. "
        "Ensure that the new questions are not the same as those in the previous quiz, but focus on the same "
        "topic areas where the user faced difficulty, as indicated by the number of attempts provided. "
        "Each question should help the user learn from their mistakes by covering similar concepts but with "
        "different wording or structure. "
        f"{QUIZ_FORMAT}:\n"
        f"{_struggled_lines(struggled)}"
    )
