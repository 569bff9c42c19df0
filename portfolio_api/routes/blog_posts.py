"""
Blog post routes.
Reads are public; writes require a bearer token. The post date is set by
the database when the post is created.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Form
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from portfolio_api.database import get_db
from portfolio_api.exceptions import NotFoundError
from portfolio_api.repositories import blog_post_repository
from portfolio_api.schemas import BlogPostPayload, BlogPostResponse, CreatedResponse, MessageResponse
from portfolio_api.services.content_service import ContentService
from portfolio_api.utils.forms import parse_image_field
from portfolio_api.utils.jwt_auth import require_bearer_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blog_posts", tags=["blog posts"])

blog_post_service = ContentService(blog_post_repository, BlogPostResponse, "Blog post")


@router.get("", response_model=List[BlogPostResponse])
async def get_blog_posts(db: AsyncSession = Depends(get_db)):
    """Get all blog posts with their images, oldest first."""
    try:
        return await blog_post_service.list_entities(db)
    except Exception as e:
        logger.error(f"Failed to fetch blog posts: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to fetch blog posts", "message": "An unexpected error occurred"}
        )


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_bearer_token)],
)
async def create_blog_post(
    title: str = Form(...),
    text: str = Form(...),
    subtitle: Optional[str] = Form(None),
    images: str = Form("[]"),
    db: AsyncSession = Depends(get_db),
):
    submitted = parse_image_field(images)
    payload = BlogPostPayload(title=title, subtitle=subtitle or None, text=text)

    try:
        post_id, image_ids = await blog_post_service.create(db, payload.model_dump(), submitted)
    except Exception as e:
        logger.error(f"Failed to insert new blog post: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to insert new blog post", "message": "An unexpected error occurred"}
        )

    return CreatedResponse(
        message=f"Blog post {post_id} created successfully.",
        id=post_id,
        image_ids=image_ids,
    )


@router.put(
    "/{post_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def update_blog_post(
    post_id: int,
    title: str = Form(...),
    text: str = Form(...),
    subtitle: Optional[str] = Form(None),
    images: str = Form(...),
    db: AsyncSession = Depends(get_db),
):
    submitted = parse_image_field(images)
    payload = BlogPostPayload(title=title, subtitle=subtitle or None, text=text)

    try:
        await blog_post_service.update(db, post_id, payload.model_dump(), submitted)
    except NotFoundError as e:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Not found", "message": e.message}
        )
    except Exception as e:
        logger.error(f"Failed to update blog post {post_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update blog post", "message": "An unexpected error occurred"}
        )

    return MessageResponse(message=f"Blog post {post_id} updated successfully", id=post_id)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def delete_blog_post(post_id: int, db: AsyncSession = Depends(get_db)):
    try:
        await blog_post_service.delete(db, post_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Not found", "message": e.message}
        )
    except Exception as e:
        logger.error(f"Failed to delete blog post {post_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete blog post", "message": "An unexpected error occurred"}
        )

    return MessageResponse(message="Blog post deleted successfully", id=post_id)
