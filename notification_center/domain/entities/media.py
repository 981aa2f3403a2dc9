"""Catalog and watch-state values exchanged with the host services."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ItemKind(str, Enum):
    """Catalog item kinds the host can report."""

    MOVIE = "Movie"
    SERIES = "Series"
    SEASON = "Season"
    EPISODE = "Episode"
    MUSIC_ALBUM = "MusicAlbum"
    BOOK = "Book"
    OTHER = "Other"


@dataclass(frozen=True)
class MediaItem:
    """Descriptive fields of a catalog item.

    ``season_number`` is the parent index of an episode; ``index_number`` is the
    episode number for episodes and the season ordinal for seasons. ``series_id``
    and ``series_name`` link episodes and seasons to their series.
    """

    id: str
    kind: ItemKind
    name: str
    production_year: int | None = None
    series_id: str | None = None
    series_name: str | None = None
    season_number: int | None = None
    index_number: int | None = None
    genres: tuple[str, ...] = field(default_factory=tuple)
    album_artists: tuple[str, ...] = field(default_factory=tuple)
    runtime_ticks: int | None = None

    @property
    def has_series(self) -> bool:
        return bool(self.series_id)


@dataclass(frozen=True)
class MediaUser:
    """A user known to the host user directory."""

    id: str
    name: str = ""


@dataclass(frozen=True)
class UserData:
    """Per-user watch state for one catalog item."""

    played: bool = False
    playback_position_ticks: int = 0


__all__ = ["ItemKind", "MediaItem", "MediaUser", "UserData"]
