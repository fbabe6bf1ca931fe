import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.responses import JSONResponse

from astrolab.config import settings
from astrolab.presets import apply_preset_defaults
from astrolab.prompts import build_edit_prompt
from astrolab.schemas import (EditParams, ErrorResponse, ProcessImageResponse,
                              PromptPreviewRequest, PromptPreviewResponse)
from astrolab.services import (AstroEditService, ImageEditError,
                               get_astro_edit_service)

router = APIRouter()
logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/png"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def too_large_response() -> JSONResponse:
    return error_response(f"Uploaded image exceeds {settings.MAX_UPLOAD_BYTES} bytes.", 400)


def validation_error_message(errors) -> str:
    """Collapses FastAPI request validation errors into one message."""
    for error in errors:
        if "file" in error.get("loc", ()):
            return "Missing or invalid image file."
    if not errors:
        return "Invalid request."
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"Invalid request: {location}: {first.get('msg', 'invalid value')}"


def parse_edit_params(payload: dict) -> EditParams:
    if not isinstance(payload, dict):
        raise ValueError("payload must be a JSON object")
    return EditParams.model_validate(apply_preset_defaults(payload))


@router.post("/process-image", response_model=ProcessImageResponse, responses=ERROR_RESPONSES)
async def process_image(
    file: Optional[UploadFile] = File(None),
    payload: Optional[str] = Form(None),
    service: AstroEditService = Depends(get_astro_edit_service),
):
    if file is None or not file.filename:
        return error_response("Missing or invalid image file.", 400)

    if not payload:
        return error_response("Missing metadata payload.", 400)

    try:
        params = parse_edit_params(json.loads(payload))
    except (ValueError, ValidationError) as e:
        # json.JSONDecodeError is a ValueError too.
        logger.error(f"Validation Error: invalid metadata payload. {e}")
        return error_response(f"Invalid metadata payload: {e}", 400)

    mime_type = file.content_type or DEFAULT_MIME_TYPE
    if mime_type not in settings.ALLOWED_MIME_TYPES:
        logger.error(f"Validation Error: Invalid file type '{mime_type}'.")
        return error_response(
            f"Unsupported image type '{mime_type}'. Allowed types: {', '.join(settings.ALLOWED_MIME_TYPES)}.", 400
        )

    # Size is known from the multipart parser, so oversized uploads are never read.
    if file.size is not None and file.size > settings.MAX_UPLOAD_BYTES:
        return too_large_response()

    image_bytes = await file.read()
    if not image_bytes:
        return error_response("Uploaded image is empty.", 400)
    if len(image_bytes) > settings.MAX_UPLOAD_BYTES:
        return too_large_response()

    logger.info(
        f"Received process-image request: object='{params.object_name}', preset={params.preset_id}, "
        f"file='{file.filename}' ({mime_type}, {len(image_bytes)} bytes)"
    )

    try:
        result = await run_in_threadpool(service.process_image, image_bytes, mime_type, params)
    except ImageEditError as e:
        logger.error(f"Image model returned no usable image: {e}")
        return error_response(str(e), 502)
    except Exception as e:
        logger.error(f"Error in /api/process-image: {e}", exc_info=True)
        return error_response(str(e) or "Unknown error", 500)

    return result


@router.post("/prompt/preview", response_model=PromptPreviewResponse, responses=ERROR_RESPONSES)
def preview_prompt(request: PromptPreviewRequest):
    try:
        params = parse_edit_params(request.params)
    except (ValueError, ValidationError) as e:
        return error_response(f"Invalid metadata payload: {e}", 400)

    return PromptPreviewResponse(
        preset_id=params.preset_id,
        prompt=build_edit_prompt(params, request.astro_facts),
    )
