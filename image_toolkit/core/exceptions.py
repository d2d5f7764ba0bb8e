"""
Custom exception handlers and error types
"""

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging
import traceback
from typing import Optional

logger = logging.getLogger(__name__)


class ImageProcessingError(Exception):
    """Base exception for every failure surfaced by the image pipeline"""

    status_code: int = 500

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class NotFoundError(ImageProcessingError):
    """Raised when a source or watermark file does not exist"""

    status_code = 404

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, "NOT_FOUND")
        self.path = path


class InvalidParameterError(ImageProcessingError):
    """Raised when request parameters are malformed or out of bounds"""

    status_code = 422

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        error_code: str = "INVALID_PARAMETER",
    ):
        super().__init__(message, error_code)
        self.parameter = parameter


class MissingWatermarkSourceError(InvalidParameterError):
    """Raised when a watermark request carries neither text nor image"""

    def __init__(
        self, message: str = "Either text or watermark_image_path must be provided"
    ):
        super().__init__(message, "watermark", "MISSING_WATERMARK_SOURCE")


class UnsupportedFormatError(ImageProcessingError):
    """Raised when an output format is outside the supported set"""

    status_code = 415

    def __init__(self, message: str, image_format: Optional[str] = None):
        super().__init__(message, "UNSUPPORTED_FORMAT")
        self.image_format = image_format


class NoColorsExtractedError(ImageProcessingError):
    """Raised when the quantizer produces no usable swatch"""

    status_code = 422

    def __init__(self, message: str = "Could not extract colors from image"):
        super().__init__(message, "NO_COLORS_EXTRACTED")


class EncodingError(ImageProcessingError):
    """Raised when the codec rejects an encode or transform operation"""

    def __init__(self, message: str, image_format: Optional[str] = None):
        super().__init__(message, "ENCODING_FAILURE")
        self.image_format = image_format


class StorageError(ImageProcessingError):
    """Raised when reading, writing or creating directories fails

    Args:
        message (str): Error message
        path (Optional[str]): Path involved in the failed operation
    Example:
        raise StorageError("Failed to write", path="public/hero.webp")
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, "IO_FAILURE")
        self.path = path


class SidecarWriteError(StorageError):
    """Raised when the metadata sidecar fails after the asset was written.

    The primary asset is not rolled back; `asset_path` points at it.
    """

    def __init__(self, message: str, asset_path: str, sidecar_path: str):
        super().__init__(message, sidecar_path)
        self.asset_path = asset_path
        self.sidecar_path = sidecar_path


class SourceFetchError(ImageProcessingError):
    """Raised when a remote placeholder image cannot be downloaded"""

    status_code = 502

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message, "SOURCE_FETCH_FAILURE")
        self.url = url


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning(f"Validation error: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={
            "detail": {
                "error": "Validation error",
                "details": "Invalid request data",
                "errors": exc.errors(),
            }
        },
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format"""
    logger.warning(f"HTTP exception: {exc.status_code} - {exc.detail}")

    if isinstance(exc.detail, dict):
        detail = exc.detail
    else:
        detail = {"error": "HTTP Error", "details": str(exc.detail)}

    return JSONResponse(status_code=exc.status_code, content={"detail": detail})


async def image_processing_exception_handler(
    request: Request, exc: ImageProcessingError
):
    """Handle pipeline errors, mapping each kind to its HTTP status"""
    if exc.status_code >= 500:
        logger.error(f"Image processing error: {exc.message}")
    else:
        logger.warning(f"Image request rejected: {exc.message}")

    detail = {
        "error": "Image processing failed",
        "details": exc.message,
        "error_code": exc.error_code,
    }
    if isinstance(exc, SidecarWriteError):
        detail["asset_path"] = exc.asset_path
    return JSONResponse(status_code=exc.status_code, content={"detail": detail})


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.error(f"Unexpected error: {type(exc).__name__}: {str(exc)}")
    logger.error(f"Traceback: {traceback.format_exc()}")

    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "error": "Internal server error",
                "details": "An unexpected error occurred",
            }
        },
    )
