"""Bookmark CRUD endpoints."""
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, require_api_token
from core.errors import BookmarkNotFoundError, BookmarkValidationError, MissingFieldError
from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from services import bookmark_service

router = APIRouter(
    prefix="/bookmarks",
    tags=["bookmarks"],
    dependencies=[Depends(require_api_token)],
)


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkResponse]:
    """List all bookmarks."""
    bookmarks = await bookmark_service.get_bookmarks(db)
    return [BookmarkResponse.model_validate(b) for b in bookmarks]


@router.post("", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    data: BookmarkCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """
    Create a new bookmark.

    title, url, description and rating are all required; the first missing
    one is named in the 400 response. The Location header points at the new
    bookmark.
    """
    missing = data.first_missing_field()
    if missing is not None:
        raise MissingFieldError(missing)

    bookmark = await bookmark_service.create_bookmark(db, data)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{bookmark.id}"
    return BookmarkResponse.model_validate(bookmark)


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    bookmark = await bookmark_service.get_bookmark(db, bookmark_id)
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)
    return BookmarkResponse.model_validate(bookmark)


@router.patch("/{bookmark_id}", status_code=204)
async def update_bookmark(
    bookmark_id: int,
    data: BookmarkUpdate | None = None,
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Update the supplied fields of a bookmark.

    A missing bookmark is reported before an empty body. title and url may
    be omitted but not set to blank strings.
    """
    if await bookmark_service.get_bookmark(db, bookmark_id) is None:
        raise BookmarkNotFoundError(bookmark_id)

    if data is None:
        data = BookmarkUpdate()

    blank = data.first_blank_field()
    if blank is not None:
        raise BookmarkValidationError(f"{blank} must not be empty")

    fields = data.supplied_fields()
    if not fields:
        raise BookmarkValidationError(
            "Request body must contain either 'title', 'url', 'description' or 'rating'",
        )

    updated = await bookmark_service.update_bookmark(db, bookmark_id, fields)
    if not updated:
        # Deleted between the existence check and the update
        raise BookmarkNotFoundError(bookmark_id)


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a bookmark."""
    deleted = await bookmark_service.delete_bookmark(db, bookmark_id)
    if not deleted:
        raise BookmarkNotFoundError(bookmark_id)
