import io
import json

import pytest

from flyearth.cities import CitySpawner, CountryState
from flyearth.game import Game, load_countries, main, parse_countries

COUNTRIES = {
    "FR": {"name": "France", "banned": False},
    "XX": {"name": "Nowhere", "banned": True},
}

AIRPORTS = {
    "FR": [
        {"name": "Paris", "population": 2000, "coords": [48.8, 2.3], "capital": True},
        {"name": "Lyon", "population": 500, "coords": [45.7, 4.8], "capital": False},
    ],
    "XX": [
        {"name": "Void", "population": 1, "coords": [0.0, 0.0], "capital": True},
    ],
}


@pytest.fixture
def data_files(tmp_path):
    countries = tmp_path / "countries.json"
    airports = tmp_path / "airports.json"
    countries.write_text(json.dumps(COUNTRIES), encoding="utf-8")
    airports.write_text(json.dumps(AIRPORTS), encoding="utf-8")
    return countries, airports


def make_game(countries, seed=3):
    spawner = CitySpawner(seed)
    spawner.load_data(AIRPORTS)
    game = Game(spawner=spawner, seed=seed)
    game.countries = parse_countries(countries)
    return game


def test_parse_countries_states():
    countries = parse_countries(COUNTRIES)
    assert countries["FR"].name == "France"
    assert countries["FR"].state is CountryState.LOCKED
    assert countries["XX"].state is CountryState.BANNED


def test_load_countries_from_file(data_files):
    countries = load_countries(data_files[0])
    assert set(countries) == {"FR", "XX"}
    assert countries["XX"].name == "Nowhere"


def test_load_map(data_files):
    game = Game(seed=1)
    game.load_map(*data_files)
    assert game.countries["FR"].state is CountryState.LOCKED
    assert [c.name for c in game.spawner.city_vector([("FR", 0), ("FR", 1)])] == [
        "Paris",
        "Lyon",
    ]


def test_unlock_only_once():
    game = make_game({"FR": COUNTRIES["FR"]})
    country = game.unlock_random_country()
    assert country.name == "France"
    assert game.countries["FR"].state is CountryState.UNLOCKED
    assert game.unlock_random_country() is None


def test_banned_country_stays_banned():
    game = make_game({"XX": COUNTRIES["XX"]})
    assert game.unlock_random_country() is None
    assert game.countries["XX"].state is CountryState.BANNED


def test_unlock_without_countries():
    game = make_game({})
    with pytest.raises(LookupError):
        game.unlock_random_country()


def test_spawn_requires_unlocked_country():
    game = make_game(COUNTRIES)
    with pytest.raises(LookupError):
        game.spawn_city()


def test_spawn_first_city_then_next():
    game = make_game({"FR": COUNTRIES["FR"]})
    game.unlock_random_country()
    first = game.spawn_city()
    assert first.name == "Paris"
    assert first.country == "FR"
    second = game.spawn_city()
    assert second.name == "Lyon"


def test_spawn_exhausted(monkeypatch):
    monkeypatch.setattr("flyearth.game.MAX_SPAWN_ATTEMPTS", 5000)
    game = make_game({"FR": COUNTRIES["FR"]})
    game.unlock_random_country()
    game.spawn_city()
    game.spawn_city()
    with pytest.raises(LookupError):
        game.spawn_city()


def test_main_session(data_files, monkeypatch, capsys):
    countries, airports = data_files
    monkeypatch.setattr("sys.stdin", io.StringIO("v\nc\nc\nc\nc\nc\nc\nv\nq\n"))
    code = main(["--countries", str(countries), "--airports", str(airports), "--seed", "2"])
    out = capsys.readouterr()
    assert code == 0
    assert out.out.splitlines() == ["France", "Paris -> France"]


def test_main_missing_file(tmp_path, capsys):
    code = main(
        [
            "--countries",
            str(tmp_path / "missing.json"),
            "--airports",
            str(tmp_path / "missing_airports.json"),
        ]
    )
    assert code == 1
    assert capsys.readouterr().err