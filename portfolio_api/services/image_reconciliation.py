"""
Image-set reconciliation.

Brings a parent entity's image links in line with a submitted image list:

* linked images missing from the submission are unlinked (the image rows stay),
* submitted images without an id are inserted and linked,
* submitted images with an id overwrite the existing image row, and are
  linked if they were not linked to this parent yet.

An id present in both lists is kept and updated, never deleted and recreated,
so submitting the same list twice changes nothing the second time.
"""
from dataclasses import dataclass
from typing import Iterable, List, Sequence
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_api.exceptions import NotFoundError
from portfolio_api.repositories import ImageParentRepository
from portfolio_api.schemas import ImageSubmission

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciliationPlan:
    to_unlink: List[int]
    to_update: List[ImageSubmission]
    to_link: List[int]
    to_insert: List[ImageSubmission]

    @property
    def is_empty(self) -> bool:
        return not (self.to_unlink or self.to_update or self.to_link or self.to_insert)


def plan_image_reconciliation(
    current_ids: Iterable[int],
    submitted: Sequence[ImageSubmission],
) -> ReconciliationPlan:
    """
    Work out which links to drop, which images to update or link, and which
    images to create. Pure function, no database access.

    Args:
        current_ids: Ids of the images currently linked to the parent
        submitted: Desired image list

    Returns:
        ReconciliationPlan
    """
    current = list(dict.fromkeys(current_ids))
    current_set = set(current)
    submitted_ids = [image.id for image in submitted if image.id is not None]
    submitted_set = set(submitted_ids)

    return ReconciliationPlan(
        to_unlink=[image_id for image_id in current if image_id not in submitted_set],
        to_update=[image for image in submitted if image.id is not None],
        to_link=[image_id for image_id in dict.fromkeys(submitted_ids) if image_id not in current_set],
        to_insert=[image for image in submitted if image.id is None],
    )


async def reconcile_images(
    db: AsyncSession,
    repository: ImageParentRepository,
    parent_id: int,
    submitted: Sequence[ImageSubmission],
) -> List[int]:
    """
    Apply reconciliation for one parent inside the caller's transaction.

    Returns:
        List[int]: Ids of the images linked to the parent afterwards

    Raises:
        NotFoundError: If a submitted image id has no images row
    """
    current_ids = await repository.current_image_ids(db, parent_id)
    plan = plan_image_reconciliation(current_ids, submitted)

    missing = await repository.images.missing_ids(db, [image.id for image in plan.to_update])
    if missing:
        raise NotFoundError("Image", missing[0])

    await repository.unlink_images(db, parent_id, plan.to_unlink)

    for image in plan.to_update:
        await repository.images.update_submission(db, image)

    for image_id in plan.to_link:
        await repository.link_image(db, parent_id, image_id)

    for image in plan.to_insert:
        image_id = await repository.images.insert_submission(db, image)
        await repository.link_image(db, parent_id, image_id)

    logger.info(
        f"Reconciled images for {repository.model.__tablename__} {parent_id}: "
        f"unlinked={len(plan.to_unlink)}, updated={len(plan.to_update)}, "
        f"linked={len(plan.to_link)}, inserted={len(plan.to_insert)}"
    )

    return await repository.current_image_ids(db, parent_id)
