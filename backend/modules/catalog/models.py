"""
Catalog module data models.

Genres and movies as returned to the HTTP layer. All values are plain
Python types; database-native types never reach these models.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class MovieOrder(str, Enum):
    """Orderings accepted for genre movie lists."""

    TITLE = "title"
    RELEASED = "released"
    RATING = "rating"
    POPULARITY = "popularity"


class GenreSummary(BaseModel):
    """A genre the user may browse."""

    id: int = Field(..., description="Genre ID")
    name: str = Field(..., description="Genre name")
    poster: Optional[str] = Field(None, description="Representative poster URL")


class MovieGenre(BaseModel):
    """Genre membership of a movie."""

    id: int
    name: str


class CastMember(BaseModel):
    """A credited cast member."""

    name: str
    poster: Optional[str] = None


class Movie(BaseModel):
    """A movie in a genre listing."""

    id: int = Field(..., description="Movie ID")
    title: str = Field(..., description="Title")
    released: Optional[str] = Field(None, description="Release date (ISO-8601)")
    year: Optional[int] = Field(None, description="Release year")
    plot: Optional[str] = Field(None, description="Plot summary")
    poster: Optional[str] = Field(None, description="Poster URL")
    rating: Optional[float] = Field(None, description="Average rating")
    popularity: Optional[float] = Field(None, description="Popularity score")
    adult: bool = Field(default=False, description="Restricted to users aged 18 or over")
    genres: list[MovieGenre] = Field(default_factory=list)
    cast: list[CastMember] = Field(default_factory=list)


class GenreDetail(GenreSummary):
    """
    A genre with two curated movie lists.

    ``latest`` holds the most recently released movies; ``popular`` the
    most popular ones not already in ``latest``.
    """

    latest: list[Movie] = Field(default_factory=list)
    popular: list[Movie] = Field(default_factory=list)
