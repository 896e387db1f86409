import logging
import time
from pathlib import Path
from typing import Callable, Optional

from prepal.core.errors import UploadFailed
from prepal.models.files import FileReference

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_DELAY_SECONDS = 2.0


def upload_with_retry(
    client,
    path: Path,
    mime_type: str = "application/pdf",
    display_name: Optional[str] = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    delay: float = DEFAULT_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> FileReference:
    """
    Upload séquentiel avec au plus `max_attempts` tentatives et un délai fixe
    entre deux tentatives (aucune attente après la dernière).
    Lève UploadFailed avec la dernière erreur si tout échoue.
    """
    display_name = display_name or Path(path).name
    max_attempts = max(1, max_attempts)
    last_error: Optional[Exception] = None

    for attempt in range(1, max_attempts + 1):
        try:
            logger.info("Uploading %s, attempt %d/%d", display_name, attempt, max_attempts)
            ref = client.upload_file(path, mime_type, display_name)
            logger.info("Uploaded %s as %s on attempt %d", display_name, ref.remoteUri, attempt)
            return ref
        except Exception as e:
            last_error = e
            logger.warning("Upload attempt %d failed: %s", attempt, e)
            if attempt < max_attempts:
                sleep(delay)

    raise UploadFailed("File upload failed", last_error=last_error) from last_error
