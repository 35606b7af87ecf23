"""Genres, songs, albums and artists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


@dataclass(eq=False)
class Genre:
    """A genre identified by its id; variants and sub-genres are genres too."""

    id: str = ""
    display: str = ""
    variants: list[Genre] = field(default_factory=list)
    sub_genres: list[Genre] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Genre):
            return NotImplemented
        return self.id == other.id

    def __lt__(self, other: Genre) -> bool:
        return self.id < other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def add_sub_genre(self, genre: Genre) -> None:
        self.sub_genres.append(genre)

    def add_variant(self, genre: Genre) -> None:
        self.variants.append(genre)

    def has_sub_genre(self, genre_id: str) -> bool:
        return any(g.id == genre_id for g in self.sub_genres)

    def has_variant(self, genre_id: str) -> bool:
        return any(g.id == genre_id for g in self.variants)

    def get_sub_genre(self, genre_id: str) -> Genre:
        """The sub-genre with that id, or an empty genre."""
        return next((g for g in self.sub_genres if g.id == genre_id), Genre())

    def get_variant(self, genre_id: str) -> Genre:
        """The variant with that id, or an empty genre."""
        return next((g for g in self.variants if g.id == genre_id), Genre())


@dataclass
class Song:
    """Tag data of one track; text fields are trimmed, genres split on commas."""

    title: str = ""
    album: str = ""
    artist: str = ""
    year: str = ""
    genres: list[str] = field(default_factory=list)
    key: str = ""
    tempo: int = 0
    type: str = ""
    bitrate: int = 0
    length: int = 0
    cover: bytes | None = None

    def __post_init__(self) -> None:
        self.title = self.title.strip()
        self.album = self.album.strip()
        self.artist = self.artist.strip()
        self.year = self.year.strip()
        self.key = self.key.strip()
        self.type = self.type.strip()
        if isinstance(self.genres, str):
            self.genres = self.genres.split(",")
        else:
            self.genres = list(self.genres)


@dataclass(eq=False)
class Album:
    """An album; two albums are the same when artist plus title match."""

    title: str = ""
    artist: str = ""
    year: str = ""
    songs: list[Song] = field(default_factory=list)
    cover: bytes | None = None

    @property
    def _identity(self) -> str:
        return self.artist + self.title

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Album):
            return NotImplemented
        return self._identity == other._identity

    def __lt__(self, other: Album) -> bool:
        return self._identity < other._identity

    def __hash__(self) -> int:
        return hash(self._identity)

    def average_tempo(self) -> int:
        """Mean song tempo truncated toward zero; 0 for an empty album."""
        if not self.songs:
            return 0
        total = sum(song.tempo for song in self.songs)
        count = len(self.songs)
        quotient = abs(total) // count
        return quotient if total >= 0 else -quotient

    def add_song(self, song: Song) -> None:
        self.songs.append(song)

    def clear(self) -> None:
        self.artist = ""
        self.title = ""
        self.year = ""
        self.songs.clear()

    def _copy(self) -> Album:
        return Album(self.title, self.artist, self.year, list(self.songs), self.cover)


class Artist:
    """An artist and their albums, keyed by album title."""

    def __init__(self, name: str = "", albums: Iterable[Album] = ()) -> None:
        self.name = name
        self._albums: dict[str, Album] = {}
        for album in albums:
            self.add_album(album)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Artist):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: Artist) -> bool:
        return self.name < other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"Artist(name={self.name!r}, albums={sorted(self._albums)!r})"

    def albums(self) -> list[Album]:
        """Copies of the albums, ordered by title."""
        return [self._albums[title]._copy() for title in sorted(self._albums)]

    def add_album(self, album: Album) -> None:
        self._albums[album.title] = album._copy()

    def add_song(self, song: Song) -> None:
        album = self._albums.get(song.album)
        if album is None:
            album = Album(song.album, song.artist, song.year)
            self._albums[song.album] = album
        album.add_song(song)