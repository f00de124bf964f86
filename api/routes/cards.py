"""
Card extraction routes
Handles image upload and returns the extracted record for user review
"""

import uuid
import logging
from dataclasses import asdict

from fastapi import APIRouter, File, HTTPException, Request, UploadFile

from api.models import ExtractedCardResponse, QueueStatusResponse
from api.services.extraction import extract_uploaded_card
from api.services.queue import acquire_extraction_slot, get_queue_status
from api.services.rate_limiter import EXTRACT_RATE_LIMIT, limiter
from cardreader.config import MAX_UPLOAD_BYTES
from cardreader.ocr.base_ocr import RecognitionError, RecognitionTimeout
from cardreader.ocr.region_crops import SegmentationError
from cardreader.utils.image_io import ImageLoadError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/extract", response_model=ExtractedCardResponse, response_model_exclude_none=True)
@limiter.limit(EXTRACT_RATE_LIMIT)
async def extract_card(request: Request, file: UploadFile = File(...)):
    """
    Extract gameplay attributes from an uploaded card image.

    The response is a draft: the caller is expected to let the user correct
    it before saving.
    """
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Empty upload")
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"Upload exceeds {MAX_UPLOAD_BYTES} bytes")

    request_id = uuid.uuid4().hex[:12]
    filename = file.filename or "upload"

    try:
        async with acquire_extraction_slot(request_id):
            record = await extract_uploaded_card(data, filename)
    except (ImageLoadError, SegmentationError) as e:
        logger.warning(f"Request {request_id}: rejected {filename}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except RecognitionTimeout as e:
        logger.error(f"Request {request_id}: OCR timed out for {filename}: {e}")
        raise HTTPException(status_code=504, detail=str(e))
    except RecognitionError as e:
        logger.error(f"Request {request_id}: OCR failed for {filename}: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return record.to_dict()


@router.get("/queue", response_model=QueueStatusResponse)
async def queue_status():
    """Current extraction queue load"""
    return asdict(get_queue_status())
