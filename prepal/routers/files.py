import logging

from fastapi import APIRouter, Depends, HTTPException

from prepal.models.files import DeleteTempFileRequest, MessageResponse
from prepal.core.deps import get_storage_service
from prepal.services.storage import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["files"])


@router.post("/delete-temp-file", response_model=MessageResponse)
def delete_temp_file(body: DeleteTempFileRequest, storage: StorageService = Depends(get_storage_service)):
    try:
        deleted = storage.delete_temp_file(body.tempFilePath)
    except OSError as e:
        logger.error("Error deleting temporary file: %s", e)
        raise HTTPException(status_code=500, detail="Failed to delete file")

    if not deleted:
        return MessageResponse(message="File already deleted")
    return MessageResponse(message="File deleted successfully")


@router.post("/cleanup", response_model=MessageResponse)
def cleanup(storage: StorageService = Depends(get_storage_service)):
    try:
        storage.cleanup()
    except OSError as e:
        logger.error("Error during cleanup: %s", e)
        raise HTTPException(status_code=500, detail="Failed to clean up folders")
    return MessageResponse(message="Cleanup successful")
