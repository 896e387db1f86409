import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from prepal.core.errors import MissingInput
from prepal.services import prompts
from prepal.services.storage import StorageService
from prepal.services.upload_retry import upload_with_retry
from prepal.utils.pdf_extract import extract_text

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


@dataclass
class QuizGeneration:
    text: str
    temp_file_path: Path
    original_file_name: str


class GenerationService:
    """
    Upload local -> upload distant (retry) -> génération.
    """

    def __init__(self, client, storage: StorageService, max_attempts: int = 3, retry_delay: float = 2.0, quiz_questions: int = 5):
        self.client = client
        self.storage = storage
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.quiz_questions = quiz_questions

    def _save(self, file: Optional[UploadFile]) -> Path:
        if file is None or not file.filename:
            raise MissingInput("No file uploaded")
        return self.storage.save_upload(file)

    def _upload(self, path: Path):
        return upload_with_retry(
            self.client,
            path,
            mime_type=PDF_MIME_TYPE,
            display_name=path.name,
            max_attempts=self.max_attempts,
            delay=self.retry_delay,
        )

    def _generate_once(self, file: Optional[UploadFile], prompt: str) -> str:
        """
        Le PDF local est supprimé à la fin de la requête, succès ou échec.
        """
        path = self._save(file)
        try:
            ref = self._upload(path)
            return self.client.generate(prompt, file_ref=ref)
        finally:
            self.storage.delete_upload(path)

    def cheatsheet(self, file: Optional[UploadFile], text_prompt: Optional[str] = None) -> str:
        return self._generate_once(file, prompts.cheatsheet_prompt(text_prompt))

    def mnemonics(self, file: Optional[UploadFile], text_prompt: Optional[str]) -> str:
        if not text_prompt or not text_prompt.strip():
            raise MissingInput("Missing textPrompt")
        return self._generate_once(file, prompts.mnemonics_prompt(text_prompt))

    def quiz(self, file: Optional[UploadFile], text_prompt: Optional[str] = None) -> QuizGeneration:
        """
        Le PDF est conservé dans uploads/ (feedback / questions supplémentaires)
        et un sidecar JSON associe son texte extrait à l'URI distante.
        """
        path = self._save(file)
        try:
            ref = self._upload(path)
            text = self.client.generate(prompts.quiz_prompt(self.quiz_questions, text_prompt), file_ref=ref)
        except Exception:
            # échec : ni quiz ni sidecar, on retire le PDF local
            self.storage.delete_upload(path)
            raise
        logger.debug("Generated quiz content: %s", text)

        sidecar = self.storage.write_sidecar(extract_text(path), ref.remoteUri)
        return QuizGeneration(text=text, temp_file_path=sidecar, original_file_name=path.name)
