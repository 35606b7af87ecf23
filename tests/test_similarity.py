import pytest

from muxer.entities import Album, Song
from muxer.similarity import (
    Attribute,
    SimilarityManager,
    most_common_attribute,
    select_ranked_genres,
)
from muxer.similarity_data import AlbumData, SimilarityDataService


def _peace_sign():
    album = Album("Peace sign", "Richie Kotzen")
    album.add_song(Song("best of times", "peace sign", "Richie Kotzen", "2009", "Rock, Soul", "", 100, "guitar"))
    album.add_song(Song("my messiah", "peace sign", "Richie Kotzen", "2009", "Rock, Soul", "", 110, "guitar"))
    album.add_song(Song("peace sign", "peace sign", "Richie Kotzen", "2009", "Rock, Soul", "", 120, "guitar"))
    album.add_song(Song("entretainer", "peace sign", "Richie Kotzen", "2009", "Rock, Soul", "", 80, "guitar"))
    return album


def _go_faster():
    album = Album("Go Faster", "Richie Kotzen")
    album.add_song(Song("go faster", "Go Faster", "Richie Kotzen", "2007", "Rock, Hard Rock", "", 110, "guitar"))
    album.add_song(Song("faith", "Go Faster", "Richie Kotzen", "2007", "Rock, Soul", "", 80, "guitar"))
    album.add_song(Song("fooled again", "Go Faster", "Richie Kotzen", "2007", "Rock, Hard Rock", "", 120, "guitar"))
    album.add_song(Song("bad things", "Go Faster", "Richie Kotzen", "2007", "Rock", "", 90, "guitar"))
    return album


def _slow():
    album = Album("Slow", "Richie Kotzen")
    album.add_song(Song("slow", "Slow", "Richie Kotzen", "2002", "Rock, Hard Rock", "", 110, "guitar"))
    album.add_song(Song("gold digger", "Slow", "Richie Kotzen", "2002", "Rock, Hard Rock", "", 80, "guitar"))
    album.add_song(Song("The Answer", "Slow", "Richie Kotzen", "2002", "Fusion", "", 120, "guitar"))
    album.add_song(Song("Scared of You", "Slow", "Richie Kotzen", "2002", "Hard Rock", "", 90, "guitar"))
    return album


@pytest.fixture
def manager(tmp_path):
    with SimilarityDataService(tmp_path / "similarity.db") as service:
        yield SimilarityManager(service)


def test_most_common_genres_are_trimmed_and_counted():
    ranking = most_common_attribute(_peace_sign(), Attribute.GENRE)
    assert dict(ranking) == {"Rock": 4, "Soul": 4}


def test_most_common_genres_descending():
    ranking = most_common_attribute(_go_faster(), Attribute.GENRE)
    counts = [count for _, count in ranking]
    assert counts == sorted(counts, reverse=True)
    assert ranking[0] == ("Rock", 4)
    assert dict(ranking)["Hard Rock"] == 2
    assert dict(ranking)["Soul"] == 1


def test_most_common_types_split_on_commas():
    album = Album("A", "B")
    album.add_song(Song("x", "A", "B", "2000", "Rock", "", 100, "guitar, voice"))
    album.add_song(Song("y", "A", "B", "2000", "Rock", "", 100, "guitar"))
    assert most_common_attribute(album, Attribute.TYPE) == [("guitar", 2), ("voice", 1)]


def test_empty_type_is_skipped():
    album = Album("A", "B")
    album.add_song(Song("x", "A", "B", "2000", "Rock", "", 100, ""))
    assert most_common_attribute(album, Attribute.TYPE) == []


def test_empty_album_has_no_ranking():
    assert most_common_attribute(Album("A", "B"), Attribute.GENRE) == []


def test_select_ranked_genres_empty():
    assert select_ranked_genres([]) == []


def test_select_ranked_genres_keeps_close_second():
    assert select_ranked_genres([("a", 8), ("b", 6), ("c", 3)]) == ["a", "b"]


def test_select_ranked_genres_drops_weak_second():
    assert select_ranked_genres([("a", 8), ("b", 4), ("c", 3)]) == ["a"]


def test_select_ranked_genres_always_keeps_top():
    assert select_ranked_genres([("only", 1)]) == ["only"]


def test_add_album_stores_rankings(manager):
    album = _peace_sign()
    manager.add_album("/music/Peace Sign", album)
    data = manager.service.get_album_data(album)
    assert data.artist == "Richie Kotzen"
    assert data.title == "Peace sign"
    assert data.average_tempo == album.average_tempo()
    assert data.path == "/music/Peace Sign"
    assert sorted(data.genre_occurrences) == [("Rock", 4), ("Soul", 4)]
    assert data.type_occurrences == [("guitar", 4)]


def test_search_similar_albums_respects_tempo_and_genres(manager):
    for path, album in (
        ("/music/Peace Sign", _peace_sign()),
        ("/music/Go Faster", _go_faster()),
        ("/music/Slow", _slow()),
    ):
        manager.add_album(path, album)

    album = _slow()
    data = manager.service.get_album_data(album)
    allowed = set(select_ranked_genres(data.genre_occurrences))
    results = manager.search_similar_albums(album, data)

    assert results
    for result in results:
        assert abs(result.average_tempo - data.average_tempo) <= 15
        assert {genre for genre, _ in result.genre_occurrences} <= allowed


def test_search_similar_albums_outside_tempo_range(manager):
    manager.add_album("/music/Peace Sign", _peace_sign())
    data = AlbumData("Someone", "Else", 500, "", [("Rock", 4)])
    assert manager.search_similar_albums(Album("Else", "Someone"), data) == []