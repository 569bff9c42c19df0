"""
Repositories for content entities.

Each repository exposes the same small capability set (fetch-all, fetch-by-id,
insert, update, delete). Image-owning entities add access to their join table.
Repositories never commit; the caller owns the transaction.
"""
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Any
import logging

from sqlalchemy import Table, select, update, delete, insert
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.models import (
    Image,
    AboutSection,
    Album,
    BlogPost,
    Work,
    Contact,
    Event,
    SocialMedia,
    about_sections_images,
    albums_images,
    blog_posts_images,
    works_images,
)
from portfolio_api.schemas import ImageSubmission

logger = logging.getLogger(__name__)

# Primary keys are 32-bit INTEGER columns
MAX_ID = 2**31 - 1


def in_id_range(entity_id: int) -> bool:
    return 1 <= entity_id <= MAX_ID


class EntityRepository:
    """CRUD access to one entity table."""

    def __init__(self, model, order_by: Sequence = ()):
        self.model = model
        self.order_by = tuple(order_by) or (model.id.asc(),)

    async def fetch_all(self, db: AsyncSession) -> List[Any]:
        result = await db.execute(select(self.model).order_by(*self.order_by))
        return list(result.scalars().all())

    async def fetch_by_id(self, db: AsyncSession, entity_id: int) -> Optional[Any]:
        if not in_id_range(entity_id):
            return None
        result = await db.execute(select(self.model).where(self.model.id == entity_id))
        return result.scalar_one_or_none()

    async def exists(self, db: AsyncSession, entity_id: int) -> bool:
        return await self.fetch_by_id(db, entity_id) is not None

    async def insert(self, db: AsyncSession, values: Dict[str, Any]) -> int:
        """Insert a row and return its id."""
        entity = self.model(**values)
        db.add(entity)
        await db.flush()
        return entity.id

    async def update(self, db: AsyncSession, entity_id: int, values: Dict[str, Any]) -> None:
        await db.execute(
            update(self.model)
            .where(self.model.id == entity_id)
            .values(**values)
        )

    async def delete(self, db: AsyncSession, entity_id: int) -> None:
        await db.execute(delete(self.model).where(self.model.id == entity_id))


class ImageRepository(EntityRepository):
    """Rows of the shared images table."""

    def __init__(self):
        super().__init__(Image)

    async def insert_submission(self, db: AsyncSession, image: ImageSubmission) -> int:
        return await self.insert(db, {
            "path": image.path,
            "title": image.title,
            "description": image.description,
        })

    async def update_submission(self, db: AsyncSession, image: ImageSubmission) -> None:
        # Fields are overwritten even when unchanged
        await self.update(db, image.id, {
            "path": image.path,
            "title": image.title,
            "description": image.description,
        })

    async def missing_ids(self, db: AsyncSession, image_ids: Iterable[int]) -> List[int]:
        """Return the ids from ``image_ids`` that have no images row, in input order."""
        wanted = list(dict.fromkeys(image_ids))
        queryable = [image_id for image_id in wanted if in_id_range(image_id)]
        if not queryable:
            return wanted
        result = await db.execute(select(Image.id).where(Image.id.in_(queryable)))
        found = set(result.scalars().all())
        return [image_id for image_id in wanted if image_id not in found]


class ImageParentRepository(EntityRepository):
    """
    Repository for an entity that owns images through a join table.

    Args:
        model: Parent model class
        link_table: Join table with ``<parent_column>`` and ``image_id``
        parent_column: Name of the join table column referencing the parent
        order_by: Ordering for fetch_all
    """

    def __init__(self, model, link_table: Table, parent_column: str, order_by: Sequence = ()):
        super().__init__(model, order_by)
        self.link_table = link_table
        self.parent_key = link_table.c[parent_column]
        self.image_key = link_table.c.image_id
        self.images = ImageRepository()

    async def fetch_all_with_images(self, db: AsyncSession) -> List[Tuple[Any, List[Image]]]:
        """
        Fetch every parent with its linked images.
        Parents without images are included with an empty list.
        """
        query = (
            select(self.model, Image)
            .outerjoin(self.link_table, self.parent_key == self.model.id)
            .outerjoin(Image, Image.id == self.image_key)
            .order_by(*self.order_by, Image.id.asc())
        )
        result = await db.execute(query)

        grouped: Dict[int, Tuple[Any, List[Image]]] = {}
        for entity, image in result.all():
            entry = grouped.setdefault(entity.id, (entity, []))
            if image is not None:
                entry[1].append(image)
        return list(grouped.values())

    async def fetch_images(self, db: AsyncSession, parent_id: int) -> List[Image]:
        result = await db.execute(
            select(Image)
            .join(self.link_table, self.image_key == Image.id)
            .where(self.parent_key == parent_id)
            .order_by(Image.id.asc())
        )
        return list(result.scalars().all())

    async def current_image_ids(self, db: AsyncSession, parent_id: int) -> List[int]:
        result = await db.execute(
            select(self.image_key)
            .where(self.parent_key == parent_id)
            .order_by(self.image_key.asc())
        )
        return list(result.scalars().all())

    async def link_image(self, db: AsyncSession, parent_id: int, image_id: int) -> None:
        await db.execute(
            insert(self.link_table).values({self.parent_key.name: parent_id, "image_id": image_id})
        )

    async def unlink_images(self, db: AsyncSession, parent_id: int, image_ids: Iterable[int]) -> None:
        """Remove link rows only; the image rows stay."""
        image_ids = list(image_ids)
        if not image_ids:
            return
        await db.execute(
            delete(self.link_table)
            .where(self.parent_key == parent_id)
            .where(self.image_key.in_(image_ids))
        )

    async def unlink_all(self, db: AsyncSession, parent_id: int) -> None:
        await db.execute(delete(self.link_table).where(self.parent_key == parent_id))

    async def delete(self, db: AsyncSession, entity_id: int) -> None:
        """Delete the parent and its link rows, keeping the images themselves."""
        await self.unlink_all(db, entity_id)
        await super().delete(db, entity_id)


about_section_repository = ImageParentRepository(
    AboutSection, about_sections_images, "about_section_id",
    order_by=(AboutSection.id.asc(),),
)
album_repository = ImageParentRepository(
    Album, albums_images, "album_id",
    order_by=(Album.date.asc(), Album.id.asc()),
)
blog_post_repository = ImageParentRepository(
    BlogPost, blog_posts_images, "blog_post_id",
    order_by=(BlogPost.date.asc(), BlogPost.id.asc()),
)
work_repository = ImageParentRepository(
    Work, works_images, "work_id",
    order_by=(Work.date.asc(), Work.id.asc()),
)
contact_repository = EntityRepository(Contact)
event_repository = EntityRepository(Event)
social_media_repository = EntityRepository(SocialMedia)
