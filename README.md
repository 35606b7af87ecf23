# muxer

A small library for organising a music collection. It has song, album,
artist and genre entities, a genre catalog read from an XML file, and an
SQLite store of per-album statistics (average tempo, genre and type
rankings) that is used to find albums that resemble one another.

It uses only the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `muxer.entities`

- `Genre(id, display, variants, sub_genres)`: genres compare, sort and hash
  by `id`. `add_variant`, `add_sub_genre`, `has_variant`, `has_sub_genre`,
  and `get_variant` / `get_sub_genre`, which return an empty `Genre` when the
  id is unknown.
- `Song(title, album, artist, year, genres, key, tempo, type)`: text fields
  are trimmed; `genres` given as a string is split on commas (the parts are
  not trimmed).
- `Album(title, artist, year, songs)`: two albums are equal when artist plus
  title match. `average_tempo()` is the mean song tempo, truncated, and 0
  for an album without songs. `add_song` and `clear`.
- `Artist(name, albums)`: keeps albums keyed by title. `albums()` returns
  copies ordered by title; `add_album` stores a copy; `add_song` adds the
  song to the album of that title, creating the album when needed.

### `muxer.genres`

- `load_genres(path)` reads a genres XML file into a dict of main genres
  keyed by id, in id order. Each child of the root element is a main genre
  named by its tag, with an optional `display` attribute and optional
  `variants` and `sub-genres` elements. A file that cannot be opened gives
  an empty dict; malformed XML raises `GenreFileError`.
- `load_catalog(path)` builds a `GenreCatalog` from such a file
  (default `../resources/genres.xml`).
- `GenreCatalog` answers `has_genre`, `has_main_genre`, `is_sub_genre`,
  `get_genre`, `get_parent_genre`, `get_sub_genre_with_parent`,
  `all_genres` and `describe`. Looking up a variant gives its main genre;
  looking up a sub-genre gives the sub-genre itself; unknown ids give an
  empty `Genre`.

### `muxer.similarity_data`

- `AlbumData`: artist, title, average tempo, path, and lists of
  `(genre, count)` and `(type, count)` pairs.
- `SimilarityDataService(path)` opens (and creates the tables of) an SQLite
  database. Without a path it uses the `similaritydb` setting from
  `muxer.config`. It is a context manager and has `close()`.
  - `add_album_data(path, album, genres, types)` stores an album's average
    tempo and its genre and type rankings.
  - `get_album_data(album)` returns the stored `AlbumData`, with rankings in
    descending count order, or an empty `AlbumData`.
  - `get_albums_by(album, tempo_range, genres, types)` returns one entry per
    matching album and genre, for albums whose average tempo lies in the
    range and that hold one of the genres (and, when given, one of the
    types), keeping only genres whose count exceeds the table's average
    minus its minimum count.

  Apostrophes in artist, title and path are stored as underscores and read
  back as apostrophes. Failing statements are logged through
  `muxer.logger`, not raised.

### `muxer.similarity`

- `most_common_attribute(album, Attribute.GENRE | Attribute.TYPE)` counts
  genres or comma-separated types over an album's songs, most frequent
  first, ties ordered by value.
- `select_ranked_genres(ranking)` keeps the top genre and each later genre
  whose count is above half the top count and above the top count minus
  the count ranked just before it.
- `SimilarityManager(service)`: `add_album(path, album)` stores an album's
  rankings; `search_similar_albums(album, album_data)` looks for albums
  within 15 of its average tempo sharing one of its selected genres.

### `muxer.config`

`IniConfigurator(config_file)` reads and writes keys of the `musicindexer`
section of an INI file (default `../resources/config.conf`). Its getters
`get_string`, `get_int`, `get_long` and `get_bool` fall back to
`"INVALID KEY NAME"`, `-1` and the given default when the file cannot be
parsed; a missing key reads as an empty string, and as 0 for the numeric
getters. `set_int` and `set_string` write the file and raise `ConfigError`
on failure.

The module-level `get_string`, `get_int`, `get_long`, `get_bool`,
`set_int` and `set_string` delegate to the configurator installed with
`set_configurator`, and raise `RuntimeError` when none is installed.

### `muxer.logger`

`FileLogger` appends timestamped lines to a file (default
`musicbrowser.log`); `ConsoleLogger` writes to a stream, standard error by
default. The module-level `log_debug`, `log_info`, `log_warn` and
`log_error` send messages to the logger installed with `set_logger` when
the level set with `set_log_level` allows it; the default level is
`LogLevel.ERROR`.

## Example

```python
from muxer.entities import Album, Song
from muxer.similarity import Attribute, SimilarityManager, most_common_attribute
from muxer.similarity_data import SimilarityDataService

album = Album(title="First Light", artist="The Examples")
album.add_song(Song("opening", "First Light", "The Examples", "2002", "Rock, Hard Rock", "", 110, "guitar"))
album.add_song(Song("closing", "First Light", "The Examples", "2002", "Fusion", "", 120, "guitar"))

print(album.average_tempo())                          # 115
print(most_common_attribute(album, Attribute.GENRE))

with SimilarityDataService(":memory:") as service:
    manager = SimilarityManager(service)
    manager.add_album("/music/The Examples/First Light", album)
    print(service.get_album_data(album))
```

## What it does not do

The package works on entities that are already built. It does not read
tags from audio files, does not walk directories to import a collection,
does not keep a full-text search index of songs, and has no command-line
program or user interface.