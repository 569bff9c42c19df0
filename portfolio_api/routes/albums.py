"""
Album routes.
Reads are public; writes require a bearer token.
"""
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status, Form
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from portfolio_api.database import get_db
from portfolio_api.exceptions import NotFoundError
from portfolio_api.repositories import album_repository
from portfolio_api.schemas import AlbumPayload, AlbumResponse, CreatedResponse, MessageResponse
from portfolio_api.services.content_service import ContentService
from portfolio_api.utils.forms import parse_image_field
from portfolio_api.utils.jwt_auth import require_bearer_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/albums", tags=["albums"])

album_service = ContentService(album_repository, AlbumResponse, "Album")


@router.get("", response_model=List[AlbumResponse])
async def get_albums(db: AsyncSession = Depends(get_db)):
    """
    Get all albums with their images, ordered by date.
    """
    try:
        return await album_service.list_entities(db)
    except Exception as e:
        logger.error(f"Failed to fetch albums: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to fetch albums", "message": "An unexpected error occurred"}
        )


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_bearer_token)],
)
async def create_album(
    date: date = Form(...),
    title: str = Form(...),
    description: str = Form(...),
    images: str = Form("[]", description="JSON array of image objects"),
    db: AsyncSession = Depends(get_db),
):
    """
    Create an album. Every entry of ``images`` becomes a new image linked to it.
    """
    submitted = parse_image_field(images)
    payload = AlbumPayload(date=date, title=title, description=description)

    try:
        album_id, image_ids = await album_service.create(db, payload.model_dump(), submitted)
    except Exception as e:
        logger.error(f"Failed to insert new album: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to insert new album", "message": "An unexpected error occurred"}
        )

    return CreatedResponse(
        message=f"Album {album_id} created successfully.",
        id=album_id,
        image_ids=image_ids,
    )


@router.put(
    "/{album_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def update_album(
    album_id: int,
    date: date = Form(...),
    title: str = Form(...),
    description: str = Form(...),
    images: str = Form(..., description="JSON array of image objects; replaces the current set"),
    db: AsyncSession = Depends(get_db),
):
    """
    Update an album and reconcile its images against the submitted list.

    Raises:
        HTTPException: 404 if the album (or a referenced image) does not exist
    """
    submitted = parse_image_field(images)
    payload = AlbumPayload(date=date, title=title, description=description)

    try:
        await album_service.update(db, album_id, payload.model_dump(), submitted)
    except NotFoundError as e:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Not found", "message": e.message}
        )
    except Exception as e:
        logger.error(f"Failed to update album {album_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update album", "message": "An unexpected error occurred"}
        )

    return MessageResponse(message=f"Album {album_id} updated successfully", id=album_id)


@router.delete(
    "/{album_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def delete_album(album_id: int, db: AsyncSession = Depends(get_db)):
    """
    Delete an album and its image links. Linked images stay in the image store.
    """
    try:
        await album_service.delete(db, album_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Not found", "message": e.message}
        )
    except Exception as e:
        logger.error(f"Failed to delete album {album_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete album", "message": "An unexpected error occurred"}
        )

    return MessageResponse(message="Album deleted successfully", id=album_id)
