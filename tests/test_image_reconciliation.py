"""
Tests for image-set reconciliation: the pure planner and the applied
routine against a real (SQLite) database.
"""

from datetime import date

import pytest
from sqlalchemy import select

from portfolio_api.exceptions import NotFoundError
from portfolio_api.models import Image, albums_images
from portfolio_api.repositories import album_repository
from portfolio_api.schemas import ImageSubmission
from portfolio_api.services.image_reconciliation import plan_image_reconciliation, reconcile_images


def img(**kwargs) -> ImageSubmission:
    kwargs.setdefault("path", f"/images/{kwargs.get('id', 'new')}.png")
    return ImageSubmission(**kwargs)


class TestPlanImageReconciliation:

    def test_unlinks_updates_and_inserts(self):
        plan = plan_image_reconciliation([1, 2], [img(id=2, title="x"), img(path="/new.png")])

        assert plan.to_unlink == [1]
        assert [image.id for image in plan.to_update] == [2]
        assert plan.to_update[0].title == "x"
        assert plan.to_link == []
        assert [image.path for image in plan.to_insert] == ["/new.png"]

    def test_same_list_twice_only_updates(self):
        submitted = [img(id=1), img(id=2)]
        plan = plan_image_reconciliation([1, 2], submitted)

        assert plan.to_unlink == []
        assert plan.to_link == []
        assert plan.to_insert == []
        assert [image.id for image in plan.to_update] == [1, 2]

    def test_empty_submission_unlinks_everything(self):
        plan = plan_image_reconciliation([3, 4], [])

        assert plan.to_unlink == [3, 4]
        assert plan.to_update == []
        assert plan.to_insert == []

    def test_known_id_not_linked_yet_is_linked(self):
        plan = plan_image_reconciliation([1], [img(id=1), img(id=7)])

        assert plan.to_link == [7]
        assert [image.id for image in plan.to_update] == [1, 7]

    def test_no_current_links(self):
        plan = plan_image_reconciliation([], [img(path="/a.png"), img(path="/b.png")])

        assert plan.to_unlink == []
        assert len(plan.to_insert) == 2
        assert not plan.is_empty

    def test_nothing_to_do(self):
        assert plan_image_reconciliation([], []).is_empty


async def _create_album(db, paths):
    image_ids = []
    album_id = await album_repository.insert(db, {
        "date": date(2024, 1, 1),
        "title": "Album",
        "description": "Test album",
    })
    for path in paths:
        image_id = await album_repository.images.insert_submission(db, ImageSubmission(path=path))
        await album_repository.link_image(db, album_id, image_id)
        image_ids.append(image_id)
    await db.commit()
    return album_id, image_ids


class TestReconcileImages:

    @pytest.mark.asyncio
    async def test_reconcile_example(self, db_session):
        album_id, (first, second) = await _create_album(db_session, ["/one.png", "/two.png"])

        linked = await reconcile_images(
            db_session, album_repository, album_id,
            [ImageSubmission(id=second, path="/two.png", title="x"), ImageSubmission(path="/new.png")],
        )
        await db_session.commit()

        assert len(linked) == 2
        assert first not in linked
        assert second in linked

        images = {image.id: image for image in await album_repository.fetch_images(db_session, album_id)}
        assert images[second].title == "x"
        assert any(image.path == "/new.png" for image in images.values())

        # Unlinked image row is kept
        result = await db_session.execute(select(Image).where(Image.id == first))
        assert result.scalar_one_or_none() is not None

    @pytest.mark.asyncio
    async def test_reconcile_twice_is_stable(self, db_session):
        album_id, image_ids = await _create_album(db_session, ["/a.png", "/b.png"])
        submitted = [
            ImageSubmission(id=image_ids[0], path="/a.png", title="A"),
            ImageSubmission(id=image_ids[1], path="/b.png", description="B"),
        ]

        first = await reconcile_images(db_session, album_repository, album_id, submitted)
        await db_session.commit()
        second = await reconcile_images(db_session, album_repository, album_id, submitted)
        await db_session.commit()

        assert first == second == sorted(image_ids)
        result = await db_session.execute(select(Image).order_by(Image.id))
        assert len(result.scalars().all()) == 2

    @pytest.mark.asyncio
    async def test_existing_image_from_elsewhere_is_linked(self, db_session):
        album_id, _ = await _create_album(db_session, [])
        other_album_id, (shared,) = await _create_album(db_session, ["/shared.png"])

        linked = await reconcile_images(
            db_session, album_repository, album_id,
            [ImageSubmission(id=shared, path="/shared.png")],
        )
        await db_session.commit()

        assert linked == [shared]
        assert await album_repository.current_image_ids(db_session, other_album_id) == [shared]

    @pytest.mark.asyncio
    async def test_unknown_image_id_raises_before_writing(self, db_session):
        album_id, image_ids = await _create_album(db_session, ["/keep.png"])

        with pytest.raises(NotFoundError) as exc_info:
            await reconcile_images(
                db_session, album_repository, album_id,
                [ImageSubmission(id=999, path="/ghost.png")],
            )
        await db_session.rollback()

        assert exc_info.value.resource_id == 999
        result = await db_session.execute(
            select(albums_images.c.image_id).where(albums_images.c.album_id == album_id)
        )
        assert result.scalars().all() == image_ids

    @pytest.mark.asyncio
    async def test_out_of_range_image_id_is_reported_missing(self, db_session):
        album_id, _ = await _create_album(db_session, ["/keep.png"])
        huge = 99999999999999999999

        with pytest.raises(NotFoundError) as exc_info:
            await reconcile_images(
                db_session, album_repository, album_id,
                [ImageSubmission(id=huge, path="/ghost.png")],
            )

        assert exc_info.value.resource_id == huge


class TestRepositoryLookups:

    @pytest.mark.asyncio
    async def test_fetch_by_id(self, db_session):
        album_id, _ = await _create_album(db_session, [])

        album = await album_repository.fetch_by_id(db_session, album_id)

        assert album.id == album_id
        assert await album_repository.fetch_by_id(db_session, album_id + 1) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("entity_id", [0, -1, 2**31, 99999999999999999999])
    async def test_ids_outside_integer_column_do_not_exist(self, db_session, entity_id):
        assert await album_repository.fetch_by_id(db_session, entity_id) is None
        assert not await album_repository.exists(db_session, entity_id)
        assert await album_repository.images.missing_ids(db_session, [entity_id]) == [entity_id]
