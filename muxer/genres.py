"""Genre catalogue loaded from an XML description of genres."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Mapping

from muxer.entities import Genre

DEFAULT_GENRES_FILE = "../resources/genres.xml"


class GenreFileError(ValueError):
    """The genres file is not well-formed XML."""


def _first_descendant(element: ET.Element, tag: str) -> ET.Element | None:
    return next((node for node in element.iter(tag) if node is not element), None)


def _genres_in(container: ET.Element | None) -> list[Genre]:
    if container is None:
        return []
    return [Genre(child.tag, child.get("display", "")) for child in container]


def load_genres(path: str | Path) -> dict[str, Genre]:
    """Read main genres keyed by id, in id order.

    Each child of the document root is a main genre named by its tag, with
    an optional ``display`` attribute, and optional ``variants`` and
    ``sub-genres`` elements listing further genres.  A file that cannot be
    opened gives no genres; a malformed file raises GenreFileError.
    """
    try:
        tree = ET.parse(path)
    except ET.ParseError as exc:
        raise GenreFileError(f"{path}: {exc}") from exc
    except OSError:
        return {}

    genres: dict[str, Genre] = {}
    for element in tree.getroot():
        genre = Genre(element.tag, element.get("display", ""))
        for variant in _genres_in(_first_descendant(element, "variants")):
            genre.add_variant(variant)
        for sub_genre in _genres_in(_first_descendant(element, "sub-genres")):
            genre.add_sub_genre(sub_genre)
        genres[genre.id] = genre
    return dict(sorted(genres.items()))


class GenreCatalog:
    """Lookups over main genres, their sub-genres and their variants.

    Looking up a variant yields its main genre; looking up a sub-genre
    yields the sub-genre itself.  Unknown ids yield an empty Genre.
    """

    def __init__(self, genres: Mapping[str, Genre] | None = None) -> None:
        self._genres: dict[str, Genre] = dict(sorted((genres or {}).items()))

    def __len__(self) -> int:
        return len(self._genres)

    @property
    def main_genres(self) -> list[Genre]:
        return list(self._genres.values())

    def _find_variant(self, genre_id: str) -> Genre:
        return next(
            (main for main in self._genres.values() if main.has_variant(genre_id)),
            Genre(),
        )

    def _find_sub_genre(self, genre_id: str) -> Genre:
        for main in self._genres.values():
            if main.has_sub_genre(genre_id):
                return main.get_sub_genre(genre_id)
        return Genre()

    def has_genre(self, genre_id: str) -> bool:
        return (
            genre_id in self._genres
            or bool(self._find_sub_genre(genre_id).id)
            or bool(self._find_variant(genre_id).id)
        )

    def has_main_genre(self, genre_id: str) -> bool:
        return genre_id in self._genres

    def is_sub_genre(self, genre_id: str) -> bool:
        return bool(self._find_sub_genre(genre_id).id)

    def get_genre(self, genre_id: str) -> Genre:
        if genre_id in self._genres:
            return self._genres[genre_id]
        genre = self._find_sub_genre(genre_id)
        if not genre.id:
            genre = self._find_variant(genre_id)
        return genre

    def get_parent_genre(self, genre_id: str) -> Genre:
        return next(
            (main for main in self._genres.values() if main.has_sub_genre(genre_id)),
            Genre(),
        )

    def get_sub_genre_with_parent(self, genre_id: str) -> tuple[Genre, Genre]:
        return self.get_parent_genre(genre_id), self.get_genre(genre_id)

    def all_genres(self) -> list[Genre]:
        """Main genres, then each main genre's sub-genres and variants."""
        result = list(self._genres.values())
        for main in self._genres.values():
            result.extend(main.sub_genres)
            result.extend(main.variants)
        return result

    def describe(self) -> str:
        parts = []
        for main in self._genres.values():
            variants = "".join(f"{v.display}," for v in main.variants)
            subs = "".join(f"{s.display}," for s in main.sub_genres)
            parts.append(
                f"[{main.display} [variants ->{variants}], [sub-genres ->{subs}] \n"
            )
        parts.append("] \n")
        return "".join(parts)


def load_catalog(path: str | Path = DEFAULT_GENRES_FILE) -> GenreCatalog:
    """Build a catalogue from a genres file."""
    return GenreCatalog(load_genres(path))