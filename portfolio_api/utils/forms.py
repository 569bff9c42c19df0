"""
Helpers for submitted form fields.
"""
from typing import List

from fastapi import HTTPException, status
from pydantic import TypeAdapter, ValidationError

from portfolio_api.schemas import ImageSubmission

_image_list_adapter = TypeAdapter(List[ImageSubmission])


def parse_image_field(raw: str) -> List[ImageSubmission]:
    """
    Decode the JSON-encoded ``images`` form field.

    Raises:
        HTTPException: 400 if the field is not a JSON array of image objects
    """
    try:
        return _image_list_adapter.validate_json(raw or "[]")
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid images field",
                "message": "images must be a JSON array of objects with at least a path",
                "detail": e.errors(include_url=False, include_context=False, include_input=False),
            }
        )
