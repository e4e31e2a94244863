"""Country and city data, and the weighted random spawner of unlocked cities."""

from __future__ import annotations

import json
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence


class CountryState(Enum):
    """State of a country on the map."""

    LOCKED = auto()
    UNLOCKED = auto()
    BANNED = auto()
    HOVERED = auto()


@dataclass
class Country:
    """A country as shown on the map."""

    name: str
    state: CountryState = CountryState.LOCKED


@dataclass
class City:
    """A city with an airport."""

    name: str = ""
    population: int = 0
    capital: bool = False
    country: str = ""
    coord: tuple[float, float] = (0.0, 0.0)


@dataclass
class UnlockableCityData:
    """Spawn progress of one unlocked country."""

    name: str
    current_city: int
    population: int


@dataclass
class CitySpawnerSave:
    """Saved state of a spawner."""

    possible_countries: list[UnlockableCityData] = field(default_factory=list)


class CitySpawner:
    """Spawns cities of unlocked countries, weighted by population."""

    #: The inverse of the probability of a city spawn on each call.
    SPAWN_FREQUENCY = 50
    AIRPORTS_DATA_FILE = Path("resources/airports.json")

    def __init__(self, seed: int | None = None) -> None:
        import random

        self._rng = random.Random(int(time.time()) if seed is None else seed)
        self._cities: dict[str, list[City]] = {}
        self._pending: deque[City] = deque()
        self._possible_countries: list[UnlockableCityData] = []

    def load(self, path: str | Path | None = None) -> None:
        """Load the airport data file (a JSON object keyed by country code)."""
        source = Path(path) if path is not None else self.AIRPORTS_DATA_FILE
        with source.open(encoding="utf-8") as handle:
            self.load_data(json.load(handle))

    def load_data(self, data: Mapping[str, Iterable[Mapping[str, Any]]]) -> None:
        """Load already parsed airport data."""
        for country, entries in data.items():
            self._cities[country] = [
                City(
                    name=str(entry["name"]),
                    population=int(entry["population"]),
                    capital=bool(entry["capital"]),
                    country=country,
                    coord=(float(entry["coords"][0]), float(entry["coords"][1])),
                )
                for entry in entries
            ]

    def random_city(self) -> City | None:
        """Return a city to spawn, or None when no city spawns this time."""
        if self._pending:
            return self._pending.popleft()

        if not self._possible_countries:
            return None
        if self._rng.getrandbits(64) % self.SPAWN_FREQUENCY != 0:
            return None

        weights = [entry.population for entry in self._possible_countries]
        chosen = self._rng.choices(self._possible_countries, weights=weights)[0]
        country_cities = self._cities.get(chosen.name, [])
        if chosen.current_city >= len(country_cities):
            return None

        city = country_cities[chosen.current_city]
        chosen.population = city.population
        chosen.current_city += 1
        return city

    def add_country(self, country: str) -> None:
        """Unlock a country: its first city spawns next, the rest randomly."""
        first = self._cities[country][0]
        self._possible_countries.append(
            UnlockableCityData(country, 1, first.population)
        )
        self._pending.append(first)

    def city_indices(self, cities: Iterable[City]) -> list[tuple[str, int]]:
        """Map cities to (country, index within that country) pairs.

        A city whose name is not found gets the country's city count as index.
        """
        indices = []
        for city in cities:
            country_cities = self._cities[city.country]
            index = next(
                (i for i, known in enumerate(country_cities) if known.name == city.name),
                len(country_cities),
            )
            indices.append((city.country, index))
        return indices

    def city_vector(self, indices: Iterable[Sequence[Any]]) -> list[City]:
        """Map (country, index) pairs back to cities."""
        result = []
        for country, index in indices:
            country_cities = self._cities[country]
            if not 0 <= index < len(country_cities):
                raise IndexError(f"city index {index} out of range for {country!r}")
            result.append(country_cities[index])
        return result