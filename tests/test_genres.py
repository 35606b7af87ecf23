import pytest

from muxer.entities import Genre
from muxer.genres import GenreCatalog, GenreFileError, load_catalog, load_genres

GENRES_XML = """<?xml version="1.0"?>
<genres>
  <rock display="Rock">
    <variants>
      <rock_and_roll display="Rock and Roll"/>
      <rock_roll display="Rock n Roll"/>
    </variants>
    <sub-genres>
      <hard_rock display="Hard Rock"/>
      <punk display="Punk"/>
    </sub-genres>
  </rock>
  <jazz display="Jazz">
    <sub-genres>
      <fusion display="Fusion"/>
    </sub-genres>
  </jazz>
</genres>
"""


@pytest.fixture
def genres_file(tmp_path):
    path = tmp_path / "genres.xml"
    path.write_text(GENRES_XML, encoding="utf-8")
    return path


@pytest.fixture
def catalog(genres_file):
    return load_catalog(genres_file)


def test_load_genres_keys_in_order(genres_file):
    genres = load_genres(genres_file)
    assert list(genres) == ["jazz", "rock"]
    rock = genres["rock"]
    assert rock.display == "Rock"
    assert [g.id for g in rock.variants] == ["rock_and_roll", "rock_roll"]
    assert [g.id for g in rock.sub_genres] == ["hard_rock", "punk"]
    assert genres["jazz"].variants == []


def test_missing_file_gives_no_genres(tmp_path):
    assert load_genres(tmp_path / "absent.xml") == {}
    assert len(load_catalog(tmp_path / "absent.xml")) == 0


def test_malformed_file_raises(tmp_path):
    path = tmp_path / "bad.xml"
    path.write_text("<genres><rock></genres>", encoding="utf-8")
    with pytest.raises(GenreFileError):
        load_genres(path)


def test_has_genre_covers_all_kinds(catalog):
    assert catalog.has_genre("rock")
    assert catalog.has_genre("hard_rock")
    assert catalog.has_genre("rock_roll")
    assert not catalog.has_genre("polka")


def test_main_and_sub_genre_checks(catalog):
    assert catalog.has_main_genre("jazz")
    assert not catalog.has_main_genre("fusion")
    assert catalog.is_sub_genre("fusion")
    assert not catalog.is_sub_genre("rock_and_roll")


def test_get_genre_variant_gives_main(catalog):
    assert catalog.get_genre("rock_and_roll").id == "rock"
    assert catalog.get_genre("punk").display == "Punk"
    assert catalog.get_genre("polka").id == ""


def test_parent_genre(catalog):
    assert catalog.get_parent_genre("fusion").id == "jazz"
    assert catalog.get_parent_genre("rock").id == ""
    parent, child = catalog.get_sub_genre_with_parent("hard_rock")
    assert (parent.id, child.id) == ("rock", "hard_rock")


def test_all_genres_order(catalog):
    ids = [g.id for g in catalog.all_genres()]
    assert ids == [
        "jazz", "rock", "fusion", "hard_rock", "punk", "rock_and_roll", "rock_roll",
    ]


def test_describe(catalog):
    assert catalog.describe() == (
        "[Jazz [variants ->], [sub-genres ->Fusion,] \n"
        "[Rock [variants ->Rock and Roll,Rock n Roll,], [sub-genres ->Hard Rock,Punk,] \n"
        "] \n"
    )


def test_catalog_from_mapping():
    blues = Genre("blues", "Blues")
    blues.add_sub_genre(Genre("delta", "Delta"))
    catalog = GenreCatalog({"blues": blues})
    assert catalog.is_sub_genre("delta")
    assert catalog.main_genres == [blues]