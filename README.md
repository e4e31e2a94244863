# flyearth

The core logic of a small flight game played on a globe.

- `flyearth.cities` loads the airport cities of each country and spawns
  them as countries are unlocked. It provides `CitySpawner`, `City`,
  `Country`, `CountryState`, `UnlockableCityData` and `CitySpawnerSave`.
- `flyearth.camera` provides `EarthCamera`, a camera that orbits the unit
  sphere. It is dragged with the left mouse button, zoomed with the scroll
  wheel and steered with the W, A, S and D keys. The module also has the
  matrix and vector helpers `look_at`, `perspective`, `rotate_about_axis`
  and `angle_between`, and the `Ray`, `MouseButton` and `InputState` types.
- `flyearth.cubesphere` builds a sphere by inflating a subdivided cube.
  `generate_cubesphere(divs)` returns a `Cubesphere` with vertex positions
  and triangle indices. The module also exposes the face-building helpers
  `set_quad`, `create_top_face` and `create_bottom_face`.
- `flyearth.game` holds `Game`, which ties the country table to a
  `CitySpawner`. It also has `load_countries` and `parse_countries`, and
  `main`, the command-line entry point.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Cities

Airport data is a JSON object keyed by country code. Each code maps to a
list of cities, and each city has `name`, `population`, `coords` (two
numbers) and `capital`.

`CitySpawner.load(path)` reads such a file. It reads
`resources/airports.json` when no path is given. `load_data` takes
already parsed data.

```python
from flyearth.cities import CitySpawner

spawner = CitySpawner(seed=1)
spawner.load_data({
    "FR": [
        {"name": "Paris", "population": 2100000, "coords": [48.85, 2.35], "capital": True},
        {"name": "Lyon", "population": 510000, "coords": [45.76, 4.83], "capital": False},
    ],
})
spawner.add_country("FR")
print(spawner.random_city().name)  # Paris, queued when the country was unlocked
```

`add_country` unlocks a country and queues its first city. `random_city`
works as follows:

1. It returns queued cities first.
2. After that, each call spawns a city with a probability of 1 in
   `CitySpawner.SPAWN_FREQUENCY` (50). Otherwise it returns `None`.
3. When a city spawns, the country is chosen at random, weighted by the
   population of the last city spawned there. The country's cities are
   handed out in the order they appear in the data.

`city_indices` turns cities into `(country, index)` pairs and
`city_vector` turns such pairs back into cities.

## Camera

`EarthCamera.update(window, dt)` takes an `InputState` that describes one
frame: window size, mouse position and delta, scroll amount, buttons held
and clicked, and keys held. It updates the following:

- `view` and `proj`, which are 4×4 numpy arrays.
- `norm_pos` and `height`. The latitude is kept within ±65° and the height
  between 1.15 and 5.
- The drag momentum, which carries on after the button is released.

Other members:

- `position` is the camera position.
- `lat_lon()` returns the camera's latitude and longitude in degrees.
- `mouse_ray` gives the world-space ray through a window point.
- `intersect_ray_unit_sphere` returns the first hit on the unit sphere, or
  the zero vector when the ray misses.

## Cubesphere

```python
from flyearth.cubesphere import generate_cubesphere

sphere = generate_cubesphere(8)
sphere.vertices  # (N, 3) float32 array of points on the unit sphere
sphere.indices   # uint32 array, three vertex indices per triangle
```

`divs` must be at least 2; smaller values raise `ValueError`.

## Command line

```
flyearth [--countries PATH] [--airports PATH] [--seed N]
```

The command loads the country table and the airport data. The defaults
are `resources/countries.json` and `resources/airports.json`.

The country file is a JSON object keyed by country code, and each entry
has `name` and `banned`. Banned countries are never unlocked.

After loading, the command reads commands from standard input, one per
line:

- `c` picks a random country. If that country is still locked, it is
  unlocked and its name is printed.
- `v` spawns a city and prints `city -> country`.
- `q` quits.

## What this package does not do

There is no window, no rendering and no user interface. The camera
computes matrices from input you supply, and the cubesphere is plain
arrays. Nothing here draws the globe, a skybox, the plane model or text,
and nothing reads a mouse or keyboard.

Spawner progress is not saved or restored. `CitySpawnerSave` is only a
data container.