import logging
from typing import Dict

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from app.photo_info.schema import ComprehensivePhotoInfoResponse, MappedTagResponse, PhotoInfoResponse
from app.photo_info.services.extractor import PhotoInfoExtractor
from app.photo_info.services.formatters import (
    format_comprehensive_info,
    format_mapped_tags,
    format_photo_info,
)
from core.config import configs
from core.dependencies import get_photo_info_extractor

logger = logging.getLogger(__name__)
router = APIRouter()


async def read_upload(file: UploadFile) -> bytes:
    # One byte past the limit is enough to tell the upload is too large
    content = await file.read(configs.MAX_UPLOAD_BYTES + 1)
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty.")
    if len(content) > configs.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Uploaded file exceeds {configs.MAX_UPLOAD_BYTES} bytes.",
        )
    logger.info(f"📥 Received {file.filename} ({len(content)} bytes)")
    return content


@router.post("", response_model=PhotoInfoResponse)
async def photo_info(
    file: UploadFile = File(...),
    include_original_tags: bool = False,
    debug: bool = False,
    extractor: PhotoInfoExtractor = Depends(get_photo_info_extractor),
):
    """
    Derive field of view, GPS position and orientation of an uploaded photo.
    """
    content = await read_upload(file)
    info = await extractor.get_photo_info(
        content,
        include_original_tags=include_original_tags,
        debug=debug or configs.DEBUG,
    )
    return format_photo_info(info)


@router.post("/mapped", response_model=Dict[str, MappedTagResponse])
async def mapped_photo_info(
    file: UploadFile = File(...),
    extractor: PhotoInfoExtractor = Depends(get_photo_info_extractor),
):
    content = await read_upload(file)
    return format_mapped_tags(await extractor.get_mapped_photo_info(content))


@router.post("/grouped", response_model=Dict[str, Dict[str, str]])
async def grouped_photo_info(
    file: UploadFile = File(...),
    extractor: PhotoInfoExtractor = Depends(get_photo_info_extractor),
):
    content = await read_upload(file)
    return await extractor.get_grouped_photo_info(content)


@router.post("/comprehensive", response_model=ComprehensivePhotoInfoResponse)
async def comprehensive_photo_info(
    file: UploadFile = File(...),
    extractor: PhotoInfoExtractor = Depends(get_photo_info_extractor),
):
    content = await read_upload(file)
    return format_comprehensive_info(await extractor.get_comprehensive_photo_info(content))
