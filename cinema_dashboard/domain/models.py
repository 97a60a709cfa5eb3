"""
Domain models for the cinema dashboard backend.

Defines the movie catalog entry, the synthetic ticket-sale transaction and the
derived revenue rows returned by the aggregation queries. All models are
frozen: a transaction never changes once generated, and revenue rows are
recomputed on every query.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from cinema_dashboard.domain.scoring import score_at

_FROZEN = {
    "frozen": True,
    "populate_by_name": True,
    "arbitrary_types_allowed": False,
}


class Movie(BaseModel):
    """
    A movie currently playing in theaters.
    """

    title: str = Field(..., description="Display title; unique within a catalog.")
    synopsis: str = Field("", description="Short plot summary.")
    thumb_url: str = Field(..., description="Small poster image (posters.profile).")
    poster_url: str = Field(..., description="Large poster image (posters.detailed).")
    duration: int = Field(..., description="Synthetic running time in minutes.")
    release_date: Optional[datetime] = Field(
        None, description="Theater release, midnight local time; None if unparseable."
    )
    score: int = Field(0, le=100, description="Critics score.")

    model_config = _FROZEN

    @property
    def title_slug(self) -> str:
        slug = self.title.lower().replace(" ", "-")
        for char in (":", "'", ",", "."):
            slug = slug.replace(char, "")
        return slug

    def score_at(self, instant: datetime) -> float:
        return score_at(self, instant)


class Transaction(BaseModel):
    """
    A single synthetic ticket sale.
    """

    timestamp: datetime
    country: str
    city: str
    theater: str
    room: str
    title: str
    seats: int = Field(..., ge=1)
    price: float = Field(..., ge=0.0, description="Total price in approx. USD.")

    model_config = _FROZEN


class TitleRevenue(BaseModel):
    title: str
    revenue: float

    model_config = _FROZEN


class DailyRevenue(BaseModel):
    day: date
    revenue: float

    model_config = _FROZEN

    @property
    def label(self) -> str:
        return self.day.strftime("%m/%d/%Y")


__all__ = ["Movie", "Transaction", "TitleRevenue", "DailyRevenue"]
