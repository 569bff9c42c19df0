"""
Work (portfolio project) routes.
Reads are public; writes require a bearer token.
"""
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status, Form
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from portfolio_api.database import get_db
from portfolio_api.exceptions import NotFoundError
from portfolio_api.repositories import work_repository
from portfolio_api.schemas import WorkPayload, WorkResponse, CreatedResponse, MessageResponse
from portfolio_api.services.content_service import ContentService
from portfolio_api.utils.forms import parse_image_field
from portfolio_api.utils.jwt_auth import require_bearer_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/works", tags=["works"])

work_service = ContentService(work_repository, WorkResponse, "Work")


@router.get("", response_model=List[WorkResponse])
async def get_works(db: AsyncSession = Depends(get_db)):
    """Get all works with their images, ordered by date."""
    try:
        return await work_service.list_entities(db)
    except Exception as e:
        logger.error(f"Failed to fetch works: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to fetch works", "message": "An unexpected error occurred"}
        )


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_bearer_token)],
)
async def create_work(
    date: date = Form(...),
    title: str = Form(...),
    description: str = Form(...),
    link: Optional[str] = Form(None),
    images: str = Form("[]"),
    db: AsyncSession = Depends(get_db),
):
    submitted = parse_image_field(images)
    payload = WorkPayload(date=date, title=title, description=description, link=link or None)

    try:
        work_id, image_ids = await work_service.create(db, payload.model_dump(), submitted)
    except Exception as e:
        logger.error(f"Failed to insert new work: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to insert new work", "message": "An unexpected error occurred"}
        )

    return CreatedResponse(
        message=f"Work {work_id} created successfully.",
        id=work_id,
        image_ids=image_ids,
    )


@router.put(
    "/{work_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def update_work(
    work_id: int,
    date: date = Form(...),
    title: str = Form(...),
    description: str = Form(...),
    link: Optional[str] = Form(None),
    images: str = Form(...),
    db: AsyncSession = Depends(get_db),
):
    submitted = parse_image_field(images)
    payload = WorkPayload(date=date, title=title, description=description, link=link or None)

    try:
        await work_service.update(db, work_id, payload.model_dump(), submitted)
    except NotFoundError as e:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Not found", "message": e.message}
        )
    except Exception as e:
        logger.error(f"Failed to update work {work_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update work", "message": "An unexpected error occurred"}
        )

    return MessageResponse(message=f"Work {work_id} updated successfully", id=work_id)


@router.delete(
    "/{work_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def delete_work(work_id: int, db: AsyncSession = Depends(get_db)):
    try:
        await work_service.delete(db, work_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Not found", "message": e.message}
        )
    except Exception as e:
        logger.error(f"Failed to delete work {work_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete work", "message": "An unexpected error occurred"}
        )

    return MessageResponse(message="Work deleted successfully", id=work_id)
