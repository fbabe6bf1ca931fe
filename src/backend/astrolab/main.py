import logging
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from astrolab.config import settings
from astrolab.routers.images import (error_response, router as images_router,
                                     validation_error_message)
from astrolab.routers.presets import router as presets_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="AstroLab API")

origins = [
    settings.FRONTEND_URL,
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.error(f"Validation Error on {request.url.path}: {errors}")
    return error_response(validation_error_message(errors), 400)


app.include_router(images_router, prefix="/api", tags=["Image Processing"])
app.include_router(presets_router, prefix="/api/presets", tags=["Presets"])


@app.get("/api/health")
def health():
    return {"status": "ok", "text_model": settings.TEXT_MODEL, "image_model": settings.IMAGE_MODEL}


if __name__ == '__main__':
    port = int(os.getenv("PORT", "7860"))
    logger.info(f"Starting Uvicorn server on http://0.0.0.0:{port}")
    uvicorn.run("astrolab.main:app", host="0.0.0.0", port=port, reload=True)
