"""Ranking of album attributes and lookup of albums similar to a given one."""

from __future__ import annotations

from collections import Counter
from enum import Enum

from muxer.entities import Album
from muxer.similarity_data import AlbumData, SimilarityDataService

TEMPO_TOLERANCE = 15


class Attribute(Enum):
    """Song attribute that can be ranked across an album."""

    GENRE = "genre"
    TYPE = "type"


def most_common_attribute(album: Album, attribute: Attribute) -> list[tuple[str, int]]:
    """Count each genre or type over the album's songs, most frequent first.

    Types are read as a comma-separated list.  Values are trimmed before
    counting; values that are empty before trimming are skipped.  Ties are
    ordered by value.
    """
    counts: Counter[str] = Counter()
    for song in album.songs:
        values = song.genres if attribute is Attribute.GENRE else song.type.split(",")
        for value in values:
            if value:
                counts[value.strip()] += 1
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def _half(value: int) -> int:
    quotient = abs(value) // 2
    return quotient if value >= 0 else -quotient


def select_ranked_genres(ranking: list[tuple[str, int]]) -> list[str]:
    """Pick the relevant genres from a ranking sorted by descending count.

    The top genre is always kept.  A later genre is kept when its count is
    above half the top count and above the top count minus the count of
    the genre ranked just before it.
    """
    if not ranking:
        return []
    top_count = ranking[0][1]
    selected = [ranking[0][0]]
    for (_, previous_count), (genre, count) in zip(ranking, ranking[1:]):
        if count > _half(top_count) and count > top_count - previous_count:
            selected.append(genre)
    return selected


class SimilarityManager:
    """Records album statistics and finds albums that resemble one another."""

    def __init__(self, service: SimilarityDataService | None = None) -> None:
        self.service = service if service is not None else SimilarityDataService()

    def add_album(self, path: str, album: Album) -> None:
        """Store the album's tempo together with its genre and type rankings."""
        genres = most_common_attribute(album, Attribute.GENRE)
        types = most_common_attribute(album, Attribute.TYPE)
        self.service.add_album_data(path, album, genres, types)

    def search_similar_albums(self, album: Album, album_data: AlbumData) -> list[AlbumData]:
        """Albums within the tempo tolerance sharing one of the relevant genres."""
        tempo = album_data.average_tempo
        tempo_range = (tempo - TEMPO_TOLERANCE, tempo + TEMPO_TOLERANCE)
        genres = select_ranked_genres(album_data.genre_occurrences)
        return self.service.get_albums_by(album, tempo_range, genres, [])