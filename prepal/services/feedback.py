import logging
from typing import List, Sequence

from prepal.core.errors import MissingInput
from prepal.services import prompts
from prepal.services.prompts import Struggled
from prepal.services.storage import StorageService
from prepal.services.upload_retry import upload_with_retry

logger = logging.getLogger(__name__)

NO_FEEDBACK_NEEDED = [
    "No additional feedback is needed. All questions were answered correctly in one attempt."
]


def struggled_questions(questions: Sequence[str], attempts: Sequence[int]) -> Struggled:
    """
    Questions ayant demandé plus d'une tentative, avec leur propre compteur.
    """
    return [(q, n) for q, n in zip(questions, attempts) if n > 1]


def split_lines(text: str) -> List[str]:
    return text.split("\n")


class FeedbackService:
    """
    Feedback / questions d'entraînement : filtre les questions "difficiles"
    puis délègue au modèle. Aucun appel distant si rien à signaler.
    """

    def __init__(self, client, storage: StorageService, max_attempts: int = 3, retry_delay: float = 2.0):
        self.client = client
        self.storage = storage
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay

    def _upload_original(self, original_file_name: str):
        path = self.storage.upload_path(original_file_name)
        return upload_with_retry(
            self.client,
            path,
            mime_type="application/pdf",
            display_name=path.name,
            max_attempts=self.max_attempts,
            delay=self.retry_delay,
        )

    def feedback_from_sidecar(self, questions: Sequence[str], attempts: Sequence[int], temp_file_path: str) -> List[str]:
        """
        Variante sidecar : le texte extrait du PDF est injecté dans le prompt.
        Le sidecar est supprimé puis le dossier uploads vidé.
        """
        struggled = struggled_questions(questions, attempts)
        if not struggled:
            return list(NO_FEEDBACK_NEEDED)

        data = self.storage.read_sidecar(temp_file_path)
        file_content = data.get("fileContent")
        if not isinstance(file_content, str) or not file_content.strip():
            raise MissingInput("Invalid or missing file content")

        text = self.client.generate(prompts.feedback_prompt(struggled, file_content=file_content))

        self.storage.delete_temp_file(temp_file_path)
        self.storage.clear_uploads()
        logger.info("Feedback generated for %d question(s), temp artifacts removed", len(struggled))
        return split_lines(text)

    def feedback_from_upload(self, questions: Sequence[str], attempts: Sequence[int], original_file_name: str) -> List[str]:
        struggled = struggled_questions(questions, attempts)
        if not struggled:
            return list(NO_FEEDBACK_NEEDED)

        ref = self._upload_original(original_file_name)
        text = self.client.generate(prompts.feedback_prompt(struggled), file_ref=ref)
        return split_lines(text)

    def more_questions(self, questions: Sequence[str], attempts: Sequence[int], original_file_name: str) -> List[str]:
        """
        Nouvelles questions (même format accolades/crochets) sur les thèmes ratés.
        """
        struggled = struggled_questions(questions, attempts)
        if not struggled:
            return list(NO_FEEDBACK_NEEDED)

        ref = self._upload_original(original_file_name)
        text = self.client.generate(prompts.more_questions_prompt(struggled), file_ref=ref)
        return split_lines(text)

    def feedback(self, questions: Sequence[str], attempts: Sequence[int], temp_file_path=None, original_file_name=None) -> List[str]:
        """
        Choisit la variante selon la référence disponible (sidecar prioritaire).
        """
        if not struggled_questions(questions, attempts):
            return list(NO_FEEDBACK_NEEDED)
        if temp_file_path:
            return self.feedback_from_sidecar(questions, attempts, temp_file_path)
        if original_file_name:
            return self.feedback_from_upload(questions, attempts, original_file_name)
        raise MissingInput("Invalid or missing tempFilePath or originalFileName")
