"""
Create/read/update/delete workflow shared by the image-owning resources
(about sections, albums, blog posts, works).

Every write runs as one unit of work and commits once at the end; the
caller rolls back when anything raises.
"""
from typing import Any, Dict, List, Sequence, Tuple, Type
import logging

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.exceptions import NotFoundError
from portfolio_api.repositories import ImageParentRepository
from portfolio_api.schemas import ImageResponse, ImageSubmission
from portfolio_api.services.image_reconciliation import reconcile_images

logger = logging.getLogger(__name__)


class ContentService:
    """
    Args:
        repository: Repository of the parent entity
        response_model: Pydantic schema with the entity columns plus ``images``
        label: Human-readable entity name used in messages (e.g. "Album")
    """

    def __init__(self, repository: ImageParentRepository, response_model: Type[BaseModel], label: str):
        self.repository = repository
        self.response_model = response_model
        self.label = label

    def _to_response(self, entity: Any, images: Sequence[Any]) -> BaseModel:
        data = {column.key: getattr(entity, column.key) for column in entity.__table__.columns}
        data["images"] = [ImageResponse.model_validate(image) for image in images]
        return self.response_model.model_validate(data)

    async def list_entities(self, db: AsyncSession) -> List[BaseModel]:
        rows = await self.repository.fetch_all_with_images(db)
        logger.info(f"Retrieved {len(rows)} {self.label.lower()} entries")
        return [self._to_response(entity, images) for entity, images in rows]

    async def create(
        self,
        db: AsyncSession,
        values: Dict[str, Any],
        images: Sequence[ImageSubmission],
    ) -> Tuple[int, List[int]]:
        """
        Insert the entity and its images.
        Submitted ids are ignored here: every entry becomes a new image row.

        Returns:
            (entity_id, image_ids)
        """
        entity_id = await self.repository.insert(db, values)

        image_ids = []
        for image in images:
            image_id = await self.repository.images.insert_submission(db, image)
            await self.repository.link_image(db, entity_id, image_id)
            image_ids.append(image_id)

        await db.commit()
        logger.info(f"Created {self.label.lower()} {entity_id} with {len(image_ids)} image(s)")
        return entity_id, image_ids

    async def update(
        self,
        db: AsyncSession,
        entity_id: int,
        values: Dict[str, Any],
        images: Sequence[ImageSubmission],
    ) -> List[int]:
        """
        Overwrite the entity fields and reconcile its images.

        Raises:
            NotFoundError: If the entity (or a referenced image) does not exist
        """
        if not await self.repository.exists(db, entity_id):
            raise NotFoundError(self.label, entity_id)

        await self.repository.update(db, entity_id, values)
        image_ids = await reconcile_images(db, self.repository, entity_id, images)

        await db.commit()
        logger.info(f"Updated {self.label.lower()} {entity_id}")
        return image_ids

    async def delete(self, db: AsyncSession, entity_id: int) -> None:
        """
        Delete the entity and its image links. Image rows are kept.

        Raises:
            NotFoundError: If the entity does not exist
        """
        if not await self.repository.exists(db, entity_id):
            raise NotFoundError(self.label, entity_id)

        await self.repository.delete(db, entity_id)
        await db.commit()
        logger.info(f"Deleted {self.label.lower()} {entity_id}")
