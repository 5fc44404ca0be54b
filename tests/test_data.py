import pytest

from tsp_genetic.data import (
    PRESETS,
    WORLD_CITIES,
    load_cities,
    load_optimum,
    make_cities,
    preset_optimum,
    unit_square,
    world_cities,
)
from tsp_genetic.solvers import City, InvalidConfiguration


TINY_TSP = """NAME: tiny
TYPE: TSP
COMMENT: 3-4-5 triangle
DIMENSION: 3
EDGE_WEIGHT_TYPE: EUC_2D
NODE_COORD_SECTION
1 0 0
2 3 0
3 3 4
EOF
"""

EXPLICIT_TSP = """NAME: explicit
TYPE: TSP
DIMENSION: 2
EDGE_WEIGHT_TYPE: EXPLICIT
EDGE_WEIGHT_FORMAT: FULL_MATRIX
EDGE_WEIGHT_SECTION
0 1
1 0
EOF
"""


def test_make_cities_builds_frozen_cities():
    cities = make_cities([("a", 1, 2), ("a", 3.5, -1)])
    assert cities == [City("a", 1.0, 2.0), City("a", 3.5, -1.0)]
    with pytest.raises(AttributeError):
        cities[0].x = 10.0


def test_make_cities_rejects_empty_and_non_finite():
    with pytest.raises(InvalidConfiguration):
        make_cities([])
    with pytest.raises(InvalidConfiguration, match="bad"):
        make_cities([("ok", 0.0, 0.0), ("bad", float("nan"), 1.0)])


def test_presets():
    assert [c.name for c in world_cities()] == [name for name, _, _ in WORLD_CITIES]
    assert [(c.x, c.y) for c in unit_square()] == [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]
    assert set(PRESETS) == {"world", "unit-square"}


def test_load_cities_from_tsplib(tmp_path):
    path = tmp_path / "tiny.tsp"
    path.write_text(TINY_TSP)
    cities = load_cities(path)
    assert [c.name for c in cities] == ["1", "2", "3"]
    assert [(c.x, c.y) for c in cities] == [(0.0, 0.0), (3.0, 0.0), (3.0, 4.0)]


def test_load_cities_without_coordinates(tmp_path):
    path = tmp_path / "explicit.tsp"
    path.write_text(EXPLICIT_TSP)
    with pytest.raises(InvalidConfiguration):
        load_cities(path)


THREED_TSP = """NAME: cube
TYPE: TSP
DIMENSION: 2
EDGE_WEIGHT_TYPE: EUC_3D
NODE_COORD_SECTION
1 0 0 0
2 0 0 10
EOF
"""

TINY_OPT_TOUR = """NAME: tiny.opt.tour
TYPE: TOUR
DIMENSION: 3
TOUR_SECTION
2
1
3
-1
EOF
"""


def test_load_cities_rejects_three_dimensional_coordinates(tmp_path):
    path = tmp_path / "cube.tsp"
    path.write_text(THREED_TSP)
    with pytest.raises(InvalidConfiguration, match="3 coordinates"):
        load_cities(path)


def test_load_optimum_measures_reference_tour(tmp_path):
    path = tmp_path / "tiny.tsp"
    path.write_text(TINY_TSP)
    (tmp_path / "tiny.opt.tour").write_text(TINY_OPT_TOUR)
    cities = load_cities(path)
    # 2 -> 1 -> 3 is 3 + 5 as an open path, plus 4 back to node 2 when closed.
    assert load_optimum(path, cities) == pytest.approx(8.0)
    assert load_optimum(path, cities, closed=True) == pytest.approx(12.0)


def test_load_optimum_from_solutions_directory(tmp_path):
    path = tmp_path / "tiny.tsp"
    path.write_text(TINY_TSP)
    (tmp_path / "solutions").mkdir()
    (tmp_path / "solutions" / "tiny.tour").write_text(TINY_OPT_TOUR)
    assert load_optimum(path, load_cities(path)) == pytest.approx(8.0)


def test_load_optimum_missing_file(tmp_path):
    path = tmp_path / "tiny.tsp"
    path.write_text(TINY_TSP)
    assert load_optimum(path, load_cities(path)) is None


def test_load_optimum_rejects_tour_over_other_cities(tmp_path):
    path = tmp_path / "tiny.tsp"
    path.write_text(TINY_TSP)
    (tmp_path / "tiny.opt.tour").write_text(TINY_OPT_TOUR.replace("\n3\n", "\n7\n"))
    with pytest.raises(InvalidConfiguration):
        load_optimum(path, load_cities(path))


def test_preset_optimum():
    assert preset_optimum("unit-square") == 3.0
    assert preset_optimum("unit-square", closed=True) == 4.0
    assert preset_optimum("world") is None

