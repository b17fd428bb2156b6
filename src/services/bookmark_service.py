"""
Persistence operations for bookmarks.

Every function takes the session explicitly and returns plain values
(records, None, counts); mapping those onto HTTP errors is the router's job.
"""
import logging
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate

logger = logging.getLogger(__name__)


async def get_bookmarks(db: AsyncSession) -> list[Bookmark]:
    """Return all bookmarks ordered by id."""
    result = await db.execute(select(Bookmark).order_by(Bookmark.id))
    return list(result.scalars().all())


async def get_bookmark(db: AsyncSession, bookmark_id: int) -> Bookmark | None:
    """Return the bookmark with the given id, or None."""
    return await db.get(Bookmark, bookmark_id)


async def create_bookmark(db: AsyncSession, data: BookmarkCreate) -> Bookmark:
    """Insert a bookmark and return it with its generated id."""
    bookmark = Bookmark(
        title=data.title,
        url=data.url,
        description=data.description,
        rating=data.rating,
    )
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    logger.info("bookmark_created", extra={"bookmark_id": bookmark.id})
    return bookmark


async def update_bookmark(
    db: AsyncSession, bookmark_id: int, fields: dict[str, Any],
) -> int:
    """
    Update only the given fields of a bookmark.

    Returns:
        Number of rows affected (0 if the bookmark does not exist).
    """
    if not fields:
        return 0
    result = await db.execute(
        update(Bookmark)
        .where(Bookmark.id == bookmark_id)
        .values(**fields)
        .execution_options(synchronize_session="fetch"),
    )
    logger.info(
        "bookmark_updated",
        extra={"bookmark_id": bookmark_id, "fields": sorted(fields)},
    )
    return result.rowcount


async def delete_bookmark(db: AsyncSession, bookmark_id: int) -> bool:
    """Delete a bookmark. Returns True if a row was removed."""
    result = await db.execute(
        delete(Bookmark)
        .where(Bookmark.id == bookmark_id)
        .execution_options(synchronize_session="fetch"),
    )
    deleted = result.rowcount > 0
    if deleted:
        logger.info("bookmark_deleted", extra={"bookmark_id": bookmark_id})
    return deleted
