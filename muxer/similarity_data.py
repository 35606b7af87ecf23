"""SQLite storage of per-album tempo, genre and type statistics."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from muxer import config, logger
from muxer.entities import Album

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS albums(artist TEXT NOT NULL,"
    " title TEXT NOT NULL, average_tempo INT, path TEXT NOT NULL,"
    " PRIMARY KEY(artist, title))",
    "CREATE TABLE IF NOT EXISTS genres(artist TEXT NOT NULL,"
    " title TEXT NOT NULL, genre TEXT NOT NULL, ocurrency INT,"
    " FOREIGN KEY(artist, title) REFERENCES albums(artist, title))",
    "CREATE TABLE IF NOT EXISTS types(artist TEXT NOT NULL,"
    " title TEXT NOT NULL, type TEXT NOT NULL, ocurrency INT,"
    " FOREIGN KEY(artist, title) REFERENCES albums(artist, title))",
)

_TAG = "[Similarity Data Service]"
_RULE = "-" * 50


def _escape(text: str) -> str:
    return text.replace("'", "_")


def _unescape(text: str) -> str:
    return text.replace("_", "'")


@dataclass
class AlbumData:
    """Stored statistics of one album."""

    artist: str = ""
    title: str = ""
    average_tempo: int = 0
    path: str = ""
    genre_occurrences: list[tuple[str, int]] = field(default_factory=list)
    type_occurrences: list[tuple[str, int]] = field(default_factory=list)


class SimilarityDataService:
    """Keeps album statistics in an SQLite database.

    Apostrophes in artist, title and path are stored as underscores and
    read back as apostrophes.  Statement failures are logged, not raised.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        if path is None:
            path = config.get_string("similaritydb")
        self._db = sqlite3.connect(str(path))
        for statement in _SCHEMA:
            self._execute(statement)
        self._db.commit()

    def __enter__(self) -> SimilarityDataService:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._db.close()

    def _execute(self, sql: str, params: Sequence[object] = ()) -> list[tuple]:
        try:
            return self._db.execute(sql, params).fetchall()
        except (sqlite3.IntegrityError, sqlite3.OperationalError) as exc:
            logger.log_error(f"{_TAG} {exc}. Query: {sql}")
            return []

    def add_album_data(
        self,
        path: str | Path,
        album: Album,
        genres: Iterable[tuple[str, int]],
        types: Iterable[tuple[str, int]],
    ) -> None:
        genres = list(genres)
        types = list(types)
        artist = _escape(album.artist).strip()
        title = _escape(album.title).strip()
        tempo = album.average_tempo()

        self._execute(
            "INSERT INTO albums (artist, title, average_tempo, path) VALUES (?, ?, ?, ?)",
            (artist, title, tempo, _escape(str(path))),
        )
        for genre, count in genres:
            self._execute(
                "INSERT INTO genres (artist, title, genre, ocurrency) VALUES (?, ?, ?, ?)",
                (artist, title, genre.strip(), int(count)),
            )
        for kind, count in types:
            self._execute(
                "INSERT INTO types (artist, title, type, ocurrency) VALUES (?, ?, ?, ?)",
                (artist, title, kind.strip(), int(count)),
            )
        self._db.commit()

        logger.log_debug(f"{_TAG} {_RULE}")
        logger.log_debug(f"{_TAG} Saving similarity data:")
        logger.log_debug(f"{_TAG} Artist: {album.artist}")
        logger.log_debug(f"{_TAG} Album: {album.title}")
        logger.log_debug(f"{_TAG} Average tempo: {tempo}")
        for genre, count in genres:
            logger.log_debug(f"{_TAG} Genre: {genre}, Ranking: {count}, ")
        for kind, count in types:
            logger.log_debug(f"{_TAG} Type: {kind}, Ranking: {count}, ")
        logger.log_debug(f"{_TAG} {_RULE}")

    def get_album_data(self, album: Album) -> AlbumData:
        """Statistics for *album*, or an empty AlbumData when none are stored."""
        key = (_escape(album.artist), _escape(album.title))
        data = AlbumData()
        rows = self._execute(
            "SELECT artist, title, average_tempo, path FROM albums"
            " WHERE artist = ? AND title = ?",
            key,
        )
        for artist, title, tempo, path in rows:
            data.artist = _unescape(artist)
            data.title = _unescape(title)
            data.average_tempo = int(tempo or 0)
            data.path = _unescape(path)

        for genre, count in self._execute(
            "SELECT genre, ocurrency FROM genres WHERE artist = ? AND title = ?"
            " ORDER BY ocurrency DESC, rowid",
            key,
        ):
            data.genre_occurrences.append((genre, int(count or 0)))

        for kind, count in self._execute(
            "SELECT type, ocurrency FROM types WHERE artist = ? AND title = ?"
            " ORDER BY ocurrency DESC, rowid",
            key,
        ):
            data.type_occurrences.append((kind, int(count or 0)))
        return data

    def get_albums_by(
        self,
        album: Album,
        tempo_range: tuple[int, int],
        genres: Sequence[str],
        types: Sequence[str],
    ) -> list[AlbumData]:
        """Albums within the tempo range holding one of *genres*.

        One entry is returned per matching album and genre, and only genres
        whose occurrence exceeds the table's average minus its minimum
        occurrence count.  When *types* is given, albums must also hold one
        of those types.
        """
        low, high = tempo_range
        sql = [
            "SELECT DISTINCT albums.artist, albums.title, albums.average_tempo,"
            " albums.path, genres.genre, genres.ocurrency FROM albums"
            " INNER JOIN genres ON albums.artist = genres.artist"
            " AND albums.title = genres.title"
            " WHERE albums.average_tempo <= ? AND albums.average_tempo >= ?"
        ]
        params: list[object] = [high, low]
        if genres:
            sql.append(f" AND genres.genre IN ({', '.join('?' * len(genres))})")
            params.extend(genres)
        if types:
            sql.append(
                " AND EXISTS (SELECT 1 FROM types WHERE types.artist = albums.artist"
                " AND types.title = albums.title"
                f" AND types.type IN ({', '.join('?' * len(types))}))"
            )
            params.extend(types)
        sql.append(
            " AND genres.ocurrency >"
            " (SELECT AVG(ocurrency) - MIN(ocurrency) FROM genres)"
        )

        return [
            AlbumData(
                artist=_unescape(artist),
                title=_unescape(title),
                average_tempo=int(tempo or 0),
                path=_unescape(path),
                genre_occurrences=[(genre, int(count or 0))],
            )
            for artist, title, tempo, path, genre, count in self._execute(
                "".join(sql), params
            )
        ]