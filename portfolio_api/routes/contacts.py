"""
Contact routes.
Reads are public; writes require a bearer token.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Form
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from portfolio_api.database import get_db
from portfolio_api.repositories import contact_repository
from portfolio_api.schemas import ContactPayload, ContactResponse, CreatedResponse, MessageResponse
from portfolio_api.utils.jwt_auth import require_bearer_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("", response_model=List[ContactResponse])
async def get_contacts(db: AsyncSession = Depends(get_db)):
    """Get all contacts."""
    try:
        contacts = await contact_repository.fetch_all(db)
        logger.info(f"Retrieved {len(contacts)} contacts")
        return [ContactResponse.model_validate(contact) for contact in contacts]
    except Exception as e:
        logger.error(f"Failed to fetch contacts: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to fetch contacts", "message": "An unexpected error occurred"}
        )


@router.post(
    "",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_bearer_token)],
)
async def create_contact(
    name: str = Form(...),
    contact: str = Form(...),
    mail: str = Form(...),
    address: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db),
):
    payload = ContactPayload(
        name=name, contact=contact, mail=mail,
        address=address or None, phone=phone or None,
    )

    try:
        contact_id = await contact_repository.insert(db, payload.model_dump())
        await db.commit()
    except Exception as e:
        logger.error(f"Failed to insert new contact: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to insert new contact", "message": "An unexpected error occurred"}
        )

    logger.info(f"Created contact {contact_id}")
    return CreatedResponse(message=f"Contact {contact_id} created successfully.", id=contact_id)


@router.put(
    "/{contact_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def update_contact(
    contact_id: int,
    name: str = Form(...),
    contact: str = Form(...),
    mail: str = Form(...),
    address: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db),
):
    payload = ContactPayload(
        name=name, contact=contact, mail=mail,
        address=address or None, phone=phone or None,
    )

    try:
        if not await contact_repository.exists(db, contact_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"error": "Contact not found", "message": f"Contact {contact_id} does not exist"}
            )

        await contact_repository.update(db, contact_id, payload.model_dump())
        await db.commit()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update contact {contact_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to update contact", "message": "An unexpected error occurred"}
        )

    logger.info(f"Updated contact {contact_id}")
    return MessageResponse(message=f"Contact {contact_id} updated successfully", id=contact_id)


@router.delete(
    "/{contact_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_bearer_token)],
)
async def delete_contact(contact_id: int, db: AsyncSession = Depends(get_db)):
    try:
        if not await contact_repository.exists(db, contact_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"error": "Contact not found", "message": f"Contact {contact_id} does not exist"}
            )

        await contact_repository.delete(db, contact_id)
        await db.commit()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete contact {contact_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to delete contact", "message": "An unexpected error occurred"}
        )

    logger.info(f"Deleted contact {contact_id}")
    return MessageResponse(message="Contact deleted successfully", id=contact_id)
