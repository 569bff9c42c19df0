"""
Event routes (exhibitions, shows and similar dated appearances).
Reads are public; writes require a bearer token.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Form
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from portfolio_api.database import get_db
from portfolio_api.repositories import event_repository
from portfolio_api.schemas import EventPayload, EventResponse, CreatedResponse, MessageResponse
from portfolio_api.utils.jwt_auth import require_bearer_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=List[EventResponse])
async def get_events(db: AsyncSession = Depends(get_db)):
    try:
        events = await event_repository.fetch_all(db)
        return [EventResponse.model_validate(event) for event in events]
    except Exception as e:
        logger.error(f"Failed to fetch events: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to fetch events", "message": "An unexpected error occurred"}
        )


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_bearer_token)],
)
async def create_event(
    name: str = Form(...),
    dates: str = Form(..., description="Free-form date or date range, e.g. '12-14 May 2024'"),
    location: str = Form(...),
    link: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db),
):
    payload = EventPayload(name=name, dates=dates, location=location, link=link or None)

    try:
        event_id = await event_repository.insert(db, payload.model_dump())
        await db.commit()
    except Exception as e:
        logger.error(f"Failed to insert new event: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to insert new event", "message": "An unexpected error occurred"}
        )

    logger.info(f"Created event {event_id}")
    return CreatedResponse(message=f"Event {event_id} created successfully.", id=event_id)


@router.put(
    "/{event_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def update_event(
    event_id: int,
    name: str = Form(...),
    dates: str = Form(...),
    location: str = Form(...),
    link: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db),
):
    payload = EventPayload(name=name, dates=dates, location=location, link=link or None)

    try:
        if not await event_repository.exists(db, event_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"error": "Event not found", "message": f"Event {event_id} does not exist"}
            )

        await event_repository.update(db, event_id, payload.model_dump())
        await db.commit()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update event {event_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update event", "message": "An unexpected error occurred"}
        )

    logger.info(f"Updated event {event_id}")
    return MessageResponse(message=f"Event {event_id} updated successfully", id=event_id)


@router.delete(
    "/{event_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def delete_event(event_id: int, db: AsyncSession = Depends(get_db)):
    try:
        if not await event_repository.exists(db, event_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"error": "Event not found", "message": f"Event {event_id} does not exist"}
            )

        await event_repository.delete(db, event_id)
        await db.commit()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete event {event_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete event", "message": "An unexpected error occurred"}
        )

    logger.info(f"Deleted event {event_id}")
    return MessageResponse(message="Event deleted successfully", id=event_id)
