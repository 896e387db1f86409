import errno
import json
import logging
import os
import uuid
from pathlib import Path
from typing import Dict

from fastapi import UploadFile, HTTPException
from starlette.status import HTTP_413_REQUEST_ENTITY_TOO_LARGE, HTTP_415_UNSUPPORTED_MEDIA_TYPE

from prepal.core.errors import MissingInput

logger = logging.getLogger(__name__)


class StorageService:
    """
    Artefacts temporaires sur disque :
    - uploads/ : PDF reçus, sous leur nom d'origine
    - temp/    : sidecars JSON {fileContent, fileUri} pour le feedback
    Rien n'est garanti durable après un cleanup().
    """

    def __init__(self, uploads_path: str = "./uploads", temp_path: str = "./temp", max_upload_mb: int = 25):
        self.uploads_path = Path(uploads_path).resolve()
        self.temp_path = Path(temp_path).resolve()
        self.max_upload_bytes = max_upload_mb * 1024 * 1024
        self.uploads_path.mkdir(parents=True, exist_ok=True)
        self.temp_path.mkdir(parents=True, exist_ok=True)

    # ---------- uploads ----------

    def save_upload(self, file: UploadFile) -> Path:
        """
        Sauvegarde un PDF uploadé sous son nom d'origine (sans dossier).
        """
        name = os.path.basename(file.filename or "")
        if not name:
            raise MissingInput("No file uploaded")
        if not name.lower().endswith(".pdf"):
            raise HTTPException(
                status_code=HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                detail="Only PDF files are accepted",
            )

        contents = file.file.read()
        if len(contents) > self.max_upload_bytes:
            raise HTTPException(
                status_code=HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large (max {self.max_upload_bytes // (1024*1024)} MB)",
            )

        dest_path = self.uploads_path / name
        with open(dest_path, "wb") as f:
            f.write(contents)
        logger.info("Saved upload %s (%d bytes)", dest_path, len(contents))
        return dest_path

    def upload_path(self, original_file_name: str) -> Path:
        name = os.path.basename(original_file_name or "")
        if not name:
            raise MissingInput("Invalid or missing original file name")
        path = self.uploads_path / name
        if not path.is_file():
            raise MissingInput(f"Uploaded file not found: {name}")
        return path

    def delete_upload(self, path: Path) -> None:
        try:
            path.unlink()
            logger.info("Uploaded file deleted from local storage: %s", path)
        except FileNotFoundError:
            logger.info("Uploaded file already absent: %s", path)

    def clear_uploads(self) -> int:
        return self._clear_dir(self.uploads_path)

    # ---------- sidecars ----------

    def write_sidecar(self, file_content: str, file_uri: str) -> Path:
        path = self.temp_path / f"{uuid.uuid4().hex}.json"
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"fileContent": file_content, "fileUri": file_uri}, f)
        logger.info("Temporary file saved at: %s", path)
        return path

    def resolve_temp_path(self, temp_file_path: str) -> Path:
        """
        Le chemin fourni par le client doit rester dans le dossier temp.
        """
        if not temp_file_path or not isinstance(temp_file_path, str):
            raise MissingInput("Invalid or missing tempFilePath")
        path = Path(temp_file_path)
        if not path.is_absolute():
            path = self.temp_path / path
        path = path.resolve()
        if path.parent != self.temp_path:
            raise MissingInput("Invalid tempFilePath")
        return path

    def read_sidecar(self, temp_file_path: str) -> Dict[str, str]:
        path = self.resolve_temp_path(temp_file_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise MissingInput("Temporary file not found")
        except json.JSONDecodeError:
            raise MissingInput("Invalid temporary file")
        if not isinstance(data, dict):
            raise MissingInput("Invalid temporary file")
        return data

    def delete_temp_file(self, temp_file_path: str) -> bool:
        """
        Supprime un sidecar. Retourne False s'il était déjà absent
        (cleanup concurrent) ; les autres erreurs OS remontent.
        """
        path = self.resolve_temp_path(temp_file_path)
        try:
            path.unlink()
        except OSError as e:
            if e.errno == errno.ENOENT:
                logger.info("Temporary file already absent: %s", path)
                return False
            raise
        logger.info("Temporary file deleted: %s", path)
        return True

    # ---------- cleanup ----------

    def _clear_dir(self, directory: Path) -> int:
        if not directory.exists():
            logger.info("%s does not exist, skipping clear operation", directory)
            return 0
        removed = 0
        for p in directory.iterdir():
            if not p.is_file():
                continue
            try:
                p.unlink()
                removed += 1
            except FileNotFoundError:
                pass
        return removed

    def cleanup(self) -> int:
        """
        Vide uploads/ et temp/, sans coordination avec les requêtes en cours.
        """
        removed = self._clear_dir(self.uploads_path) + self._clear_dir(self.temp_path)
        logger.info("Uploads and temp folders cleaned up (%d files)", removed)
        return removed
