"""
Snapshot image relay endpoint.

Stores an uploaded PNG under a random name in the bucket and returns its
public URL. Also answers on ``/`` for older clients.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, File, UploadFile

from voicecolor.api.deps import get_object_store
from voicecolor.core.exceptions import MissingUploadError
from voicecolor.core.models import ErrorResponse, UploadResponse
from voicecolor.services.storage import BaseObjectStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["share"])

SNAPSHOT_CONTENT_TYPE = "image/png"
_ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.post("/upload", response_model=UploadResponse, responses=_ERROR_RESPONSES)
@router.post("/", response_model=UploadResponse, include_in_schema=False)
async def upload_image(
    image: UploadFile | None = File(None),
    store: BaseObjectStore = Depends(get_object_store),
) -> UploadResponse:
    """Store the ``image`` upload and return where it can be fetched."""
    if image is None:
        raise MissingUploadError("image")

    key = f"{uuid.uuid4()}.png"
    await store.put(key, await image.read(), content_type=SNAPSHOT_CONTENT_TYPE)
    return UploadResponse(url=store.public_url(key))
