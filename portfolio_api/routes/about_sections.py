"""
About-section routes.
Reads are public; writes require a bearer token.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Form
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from portfolio_api.database import get_db
from portfolio_api.exceptions import NotFoundError
from portfolio_api.repositories import about_section_repository
from portfolio_api.schemas import AboutSectionPayload, AboutSectionResponse, CreatedResponse, MessageResponse
from portfolio_api.services.content_service import ContentService
from portfolio_api.utils.forms import parse_image_field
from portfolio_api.utils.jwt_auth import require_bearer_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/about_sections", tags=["about sections"])

about_section_service = ContentService(about_section_repository, AboutSectionResponse, "About section")


@router.get("", response_model=List[AboutSectionResponse])
async def get_about_sections(db: AsyncSession = Depends(get_db)):
    """Get all about sections with their images, ordered by id."""
    try:
        return await about_section_service.list_entities(db)
    except Exception as e:
        logger.error(f"Failed to fetch about sections: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to fetch about sections", "message": "An unexpected error occurred"}
        )


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_bearer_token)],
)
async def create_about_section(
    text: str = Form(...),
    images: str = Form("[]"),
    db: AsyncSession = Depends(get_db),
):
    submitted = parse_image_field(images)
    payload = AboutSectionPayload(text=text)

    try:
        section_id, image_ids = await about_section_service.create(db, payload.model_dump(), submitted)
    except Exception as e:
        logger.error(f"Failed to insert new about section: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to insert new about section", "message": "An unexpected error occurred"}
        )

    return CreatedResponse(
        message=f"About section {section_id} created successfully.",
        id=section_id,
        image_ids=image_ids,
    )


@router.put(
    "/{section_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def update_about_section(
    section_id: int,
    text: str = Form(...),
    images: str = Form(...),
    db: AsyncSession = Depends(get_db),
):
    submitted = parse_image_field(images)
    payload = AboutSectionPayload(text=text)

    try:
        await about_section_service.update(db, section_id, payload.model_dump(), submitted)
    except NotFoundError as e:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Not found", "message": e.message}
        )
    except Exception as e:
        logger.error(f"Failed to update about section {section_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update about section", "message": "An unexpected error occurred"}
        )

    return MessageResponse(message=f"About section {section_id} updated successfully", id=section_id)


@router.delete(
    "/{section_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def delete_about_section(section_id: int, db: AsyncSession = Depends(get_db)):
    try:
        await about_section_service.delete(db, section_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Not found", "message": e.message}
        )
    except Exception as e:
        logger.error(f"Failed to delete about section {section_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete about section", "message": "An unexpected error occurred"}
        )

    return MessageResponse(message="About section deleted successfully", id=section_id)
