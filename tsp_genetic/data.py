from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
import tsplib95

from .solvers.base import City, InvalidConfiguration, tour_length


WORLD_CITIES: List[Tuple[str, float, float]] = [
    ("London", 51.509865, -0.118092),
    ("New York", 40.712776, -74.005974),
    ("Tokyo", 35.689487, 139.691711),
    ("Sydney", -33.865143, 151.209900),
    ("Paris", 48.856613, 2.352222),
    ("Rio de Janeiro", -22.906847, -43.172897),
    ("Berlin", 52.520008, 13.404954),
]


def make_cities(rows: Iterable[Tuple[str, float, float]]) -> List[City]:
    rows = list(rows)
    if not rows:
        raise InvalidConfiguration("City set is empty.")
    coords = np.array([[float(x), float(y)] for _, x, y in rows], dtype=float)
    bad = ~np.isfinite(coords).all(axis=1)
    if bad.any():
        names = [str(rows[i][0]) for i in np.flatnonzero(bad)]
        raise InvalidConfiguration(f"Non-finite coordinates for: {', '.join(names)}")
    return [City(str(name), float(x), float(y)) for (name, _, _), (x, y) in zip(rows, coords)]


def world_cities() -> List[City]:
    return make_cities(WORLD_CITIES)


def unit_square() -> List[City]:
    return make_cities([("A", 0.0, 0.0), ("B", 1.0, 0.0), ("C", 1.0, 1.0), ("D", 0.0, 1.0)])


PRESETS = {
    "world": world_cities,
    "unit-square": unit_square,
}


def load_cities(path: Path) -> List[City]:
    """Read node coordinates from a TSPLIB ``.tsp`` file."""
    problem = tsplib95.load(str(path))
    coords = problem.node_coords or problem.display_data
    if not coords:
        raise InvalidConfiguration(f"{path} has no NODE_COORD_SECTION or DISPLAY_DATA_SECTION.")
    rows = []
    for node in sorted(coords):
        xy = coords[node]
        if len(xy) != 2:
            raise InvalidConfiguration(
                f"{path}: node {node} has {len(xy)} coordinates; only planar (x, y) cities are supported."
            )
        rows.append((str(node), xy[0], xy[1]))
    return make_cities(rows)


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def load_optimum(path: Path, cities: Sequence[City], closed: bool = False) -> Optional[float]:
    """Length of the reference tour stored beside a ``.tsp`` file, if any.

    The tour is measured with the same metric the solver uses, so ``closed``
    must match the run.
    """
    index = {c.name: i for i, c in enumerate(cities)}
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        tour_file = tsplib95.parse(candidate.read_text())
        if not tour_file.tours:
            raise InvalidConfiguration(f"{candidate} has no TOUR_SECTION.")
        nodes = [str(n) for n in tour_file.tours[0]]
        missing = [n for n in nodes if n not in index]
        if missing or len(set(nodes)) != len(nodes) or len(nodes) != len(cities):
            raise InvalidConfiguration(f"{candidate} does not visit the cities of {path} exactly once.")
        return tour_length(cities, [index[n] for n in nodes], closed=closed)
    return None


def preset_optimum(name: str, closed: bool = False) -> Optional[float]:
    if name == "unit-square":
        return 4.0 if closed else 3.0
    return None
