"""Game state: the countries on the map and the cities that spawn in them."""

from __future__ import annotations

import argparse
import json
import random
import sys
from pathlib import Path
from typing import Any, Mapping

from flyearth.cities import City, CitySpawner, Country, CountryState

COUNTRIES_DATA_FILE = Path("resources/countries.json")

#: Spawn attempts made by ``Game.spawn_city`` before it gives up.
MAX_SPAWN_ATTEMPTS = 1_000_000


def parse_countries(data: Mapping[str, Mapping[str, Any]]) -> dict[str, Country]:
    """Build the country table from parsed data keyed by country code."""
    return {
        code: Country(
            name=str(entry["name"]),
            state=CountryState.BANNED if bool(entry["banned"]) else CountryState.LOCKED,
        )
        for code, entry in data.items()
    }


def load_countries(path: str | Path | None = None) -> dict[str, Country]:
    """Read the country data file (a JSON object keyed by country code)."""
    source = Path(path) if path is not None else COUNTRIES_DATA_FILE
    with source.open(encoding="utf-8") as handle:
        return parse_countries(json.load(handle))


class Game:
    """Countries that can be unlocked and the spawner of their cities."""

    def __init__(self, spawner: CitySpawner | None = None, seed: int | None = None) -> None:
        self.spawner = spawner if spawner is not None else CitySpawner(seed)
        self.countries: dict[str, Country] = {}
        self._rng = random.Random(seed)

    def load_map(
        self,
        countries_path: str | Path | None = None,
        airports_path: str | Path | None = None,
    ) -> None:
        """Load the airports into the spawner and the country table."""
        self.spawner.load(airports_path)
        self.countries = load_countries(countries_path)

    def unlock_random_country(self) -> Country | None:
        """Pick a random country and unlock it if it is still locked.

        Returns the unlocked country, or None when the pick was not locked.
        """
        if not self.countries:
            raise LookupError("no countries loaded")
        code = self._rng.choice(list(self.countries))
        country = self.countries[code]
        if country.state is not CountryState.LOCKED:
            return None
        self.spawner.add_country(code)
        country.state = CountryState.UNLOCKED
        return country

    def spawn_city(self) -> City:
        """Draw from the spawner until a city spawns."""
        if not any(c.state is CountryState.UNLOCKED for c in self.countries.values()):
            raise LookupError("no country is unlocked")
        for _ in range(MAX_SPAWN_ATTEMPTS):
            city = self.spawner.random_city()
            if city is not None:
                return city
        raise LookupError("no city left to spawn")


def main(argv: list[str] | None = None) -> int:
    """Run the game from standard input: 'c' unlocks a country, 'v' spawns a city, 'q' quits."""
    parser = argparse.ArgumentParser(prog="flyearth")
    parser.add_argument("--countries", type=Path, default=COUNTRIES_DATA_FILE)
    parser.add_argument("--airports", type=Path, default=CitySpawner.AIRPORTS_DATA_FILE)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    game = Game(seed=args.seed)
    try:
        game.load_map(args.countries, args.airports)
    except (OSError, ValueError, KeyError) as exc:
        print(exc, file=sys.stderr)
        return 1

    for line in sys.stdin:
        command = line.strip().lower()
        if command == "q":
            break
        try:
            if command == "c":
                country = game.unlock_random_country()
                if country is not None:
                    print(country.name)
            elif command == "v":
                city = game.spawn_city()
                print(f"{city.name} -> {game.countries[city.country].name}")
            elif command:
                print(f"unknown command: {command}", file=sys.stderr)
        except (LookupError, IndexError) as exc:
            print(exc, file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())