"""
Catalog API endpoints.

Genre and movie browsing for subscribed users.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from api.middleware.auth import get_current_user
from api.dependencies import get_catalog_service
from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser

from .interfaces import ICatalogService
from .models import GenreDetail, GenreSummary, Movie, MovieOrder

router = APIRouter()


@router.get("", response_model=list[GenreSummary])
async def list_genres(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ICatalogService = Depends(get_catalog_service),
) -> list[GenreSummary]:
    """List the genres covered by the caller's subscription."""
    return await service.resolve_genres_for_user(user.id)


@router.get("/{genre_id}", response_model=GenreDetail)
async def get_genre(
    genre_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ICatalogService = Depends(get_catalog_service),
) -> GenreDetail:
    """
    Get a genre with its latest and most popular movies.

    Genres outside the caller's plan are reported as not found.
    """
    return await service.resolve_genre_detail(user.id, genre_id)


@router.get("/{genre_id}/movies", response_model=list[Movie])
async def list_genre_movies(
    genre_id: int,
    order_by: str = Query(
        default=MovieOrder.TITLE.value,
        alias="orderBy",
        description="One of: " + ", ".join(order.value for order in MovieOrder),
    ),
    page: int = Query(default=1, description="Page number (1-indexed)"),
    limit: Optional[int] = Query(default=None, description="Items per page"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: ICatalogService = Depends(get_catalog_service),
    settings: Settings = Depends(get_settings),
) -> list[Movie]:
    """
    List one page of a genre's movies.

    Invalid orderings and out-of-range pages are rejected with 422.
    """
    return await service.list_movies_for_genre(
        user.id,
        genre_id,
        order_by=order_by,
        limit=limit if limit is not None else settings.default_movie_page_size,
        page=page,
    )
