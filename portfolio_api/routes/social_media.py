"""
Social media link routes.
Reads are public; writes require a bearer token.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Form
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging

from portfolio_api.database import get_db
from portfolio_api.repositories import social_media_repository
from portfolio_api.schemas import SocialMediaPayload, SocialMediaResponse, CreatedResponse, MessageResponse
from portfolio_api.utils.jwt_auth import require_bearer_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/social_media", tags=["social media"])


@router.get("", response_model=List[SocialMediaResponse])
async def get_social_media(db: AsyncSession = Depends(get_db)):
    try:
        links = await social_media_repository.fetch_all(db)
        return [SocialMediaResponse.model_validate(link) for link in links]
    except Exception as e:
        logger.error(f"Failed to fetch social media: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to fetch social media", "message": "An unexpected error occurred"}
        )


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_bearer_token)],
)
async def create_social_media(
    name: str = Form(...),
    link: str = Form(...),
    db: AsyncSession = Depends(get_db),
):
    payload = SocialMediaPayload(name=name, link=link)

    try:
        social_media_id = await social_media_repository.insert(db, payload.model_dump())
        await db.commit()
    except Exception as e:
        logger.error(f"Failed to insert new social media: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to insert new social media", "message": "An unexpected error occurred"}
        )

    logger.info(f"Created social media {social_media_id}")
    return CreatedResponse(
        message=f"Social media {social_media_id} created successfully.",
        id=social_media_id,
    )


@router.put(
    "/{social_media_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def update_social_media(
    social_media_id: int,
    name: str = Form(...),
    link: str = Form(...),
    db: AsyncSession = Depends(get_db),
):
    payload = SocialMediaPayload(name=name, link=link)

    try:
        if not await social_media_repository.exists(db, social_media_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"error": "Social media not found", "message": f"Social media {social_media_id} does not exist"}
            )

        await social_media_repository.update(db, social_media_id, payload.model_dump())
        await db.commit()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update social media {social_media_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update social media", "message": "An unexpected error occurred"}
        )

    return MessageResponse(message=f"Social media {social_media_id} updated successfully", id=social_media_id)


@router.delete(
    "/{social_media_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def delete_social_media(social_media_id: int, db: AsyncSession = Depends(get_db)):
    try:
        if not await social_media_repository.exists(db, social_media_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"error": "Social media not found", "message": f"Social media {social_media_id} does not exist"}
            )

        await social_media_repository.delete(db, social_media_id)
        await db.commit()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete social media {social_media_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete social media", "message": "An unexpected error occurred"}
        )

    return MessageResponse(message="Social media deleted successfully", id=social_media_id)
