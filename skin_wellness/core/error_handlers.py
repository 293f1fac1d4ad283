"""
Error Handlers - Skin Wellness Visualization API
skin_wellness/core/error_handlers.py

Translates request validation failures and domain exceptions into
ErrorResponse JSON bodies.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from skin_wellness.core.exceptions import (
    EditorStateError,
    LevelOutOfRangeError,
    RegistryContractError,
    SegmentNotActiveError,
    SkinWellnessException,
    UnknownCategoryError,
    UnknownParameterError,
)
from skin_wellness.models.common import ErrorResponse

logger = logging.getLogger(__name__)


#  Validation Error Messages


FIELD_MESSAGES = {
    "visibility_level": {
        "less_than_equal": "Visibility level must be between 0 and 10",
        "greater_than_equal": "Visibility level must be between 0 and 10",
        "int_type": "Visibility level must be an integer",
        "int_parsing": "Visibility level must be a valid integer",
    },
    "score_value": {
        "greater_than_equal": "Score value must be at least 1",
        "int_type": "Score value must be an integer",
    },
    "category_id": {
        "missing": "Category ID is required",
        "string_too_short": "Category ID cannot be empty",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_pattern_mismatch": "Field '{field}' has invalid format",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "string_type": "Field '{field}' must be a string",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "enum": "Field '{field}' has an unsupported value",
    "value_error": "Field '{field}' is invalid",
    "extra_forbidden": "Unknown field '{field}' is not allowed",
}

_ERROR_CODES = {
    UnknownCategoryError: ("CATEGORY_NOT_FOUND", status.HTTP_404_NOT_FOUND),
    UnknownParameterError: ("PARAMETER_NOT_FOUND", status.HTTP_404_NOT_FOUND),
    LevelOutOfRangeError: ("LEVEL_OUT_OF_RANGE", status.HTTP_422_UNPROCESSABLE_ENTITY),
    RegistryContractError: ("REGISTRY_CONTRACT", status.HTTP_422_UNPROCESSABLE_ENTITY),
    SegmentNotActiveError: ("SEGMENT_NOT_ACTIVE", status.HTTP_422_UNPROCESSABLE_ENTITY),
    EditorStateError: ("EDITOR_STATE", status.HTTP_422_UNPROCESSABLE_ENTITY),
}


def get_validation_message(field: str, error_type: str) -> str:
    leaf = field.rsplit(".", 1)[-1]
    if leaf in FIELD_MESSAGES:
        for key in FIELD_MESSAGES[leaf]:
            if key in error_type:
                return FIELD_MESSAGES[leaf][key]
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


def error_body(error_code: str, message: str, details: Optional[dict] = None) -> dict:
    return ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        timestamp=datetime.now(timezone.utc),
    ).model_dump(mode="json")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=error_body("VALIDATION_ERROR", "Request validation failed"),
        )
    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])
    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("INVALID_REQUEST", "Malformed JSON request body"),
        )
    field = ".".join(str(l) for l in loc if l != "body")
    message = get_validation_message(field, error_type)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body(
            "VALIDATION_ERROR",
            message,
            {"field": field, "type": error_type} if field else None,
        ),
    )


async def domain_exception_handler(request: Request, exc: SkinWellnessException):
    error_code, status_code = _ERROR_CODES.get(
        type(exc), ("CONTRACT_VIOLATION", status.HTTP_422_UNPROCESSABLE_ENTITY)
    )
    logger.warning("%s on %s: %s", error_code, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content=error_body(error_code, str(exc)),
    )
