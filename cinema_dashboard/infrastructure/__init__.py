"""
Infrastructure package for the cinema dashboard backend.

Centralizes I/O with the outside world (HTTP movie source, response cache).
Keep this layer focused on I/O, decoupled from catalog and generation logic.
"""

from cinema_dashboard.infrastructure.movie_source import (
    CachedMovieSource,
    MovieCache,
    MovieSource,
    fetch_movies_text,
)

__all__ = [
    "CachedMovieSource",
    "MovieCache",
    "MovieSource",
    "fetch_movies_text",
]
