import logging
from pathlib import Path
from typing import Optional

from openai import OpenAI, OpenAIError

from prepal.core.errors import UpstreamFailure
from prepal.models.files import FileReference

logger = logging.getLogger(__name__)


class GenAIClient:
    """
    Client du service génératif : dépôt de fichiers + génération de texte.
    Une seule instance longue durée, injectée dans les routes (voir core.deps).
    """

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", timeout: float = 120.0, client: Optional[OpenAI] = None):
        self.model = model
        self._client = client or OpenAI(api_key=api_key or None, timeout=timeout)

    def upload_file(self, path: Path, mime_type: str, display_name: str) -> FileReference:
        """
        Dépose le fichier local côté service. Les erreurs SDK remontent telles
        quelles : c'est upload_with_retry qui décide de réessayer.
        """
        with open(path, "rb") as fh:
            uploaded = self._client.files.create(
                file=(display_name, fh, mime_type),
                purpose="user_data",
            )
        return FileReference(remoteUri=uploaded.id, mimeType=mime_type, displayName=display_name)

    def generate(self, prompt: str, file_ref: Optional[FileReference] = None) -> str:
        """
        Un seul appel de génération, sans retry.
        """
        content = []
        if file_ref is not None:
            content.append({"type": "file", "file": {"file_id": file_ref.remoteUri}})
        content.append({"type": "text", "text": prompt})

        try:
            comp = self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": content}],
                temperature=0.2,
            )
        except OpenAIError as e:
            logger.error("Generation failed: %s", e)
            raise UpstreamFailure("Content generation failed") from e

        text = comp.choices[0].message.content or ""
        logger.info("Generated %d chars with %s", len(text), self.model)
        return text
