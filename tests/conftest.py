import random

import pytest

from geomspec import KINDS


class Rand:
    """Random source, pulled out into fixture with repr so the seed is
    displayed on failing tests"""

    def __init__(self, seed=0):
        self.seed = seed or random.randint(0, 2**32 - 1)
        self.rand = random.Random(self.seed)

    def __repr__(self):
        return f"Rand({self.seed})"

    def position(self):
        """A random 2D or 3D position"""
        n = self.rand.choice([2, 3])
        return [round(self.rand.uniform(-180, 180), 6) for _ in range(n)]

    def positions(self, n, m):
        return [self.position() for _ in range(self.rand.randint(n, m))]

    def geometry(self, max_depth=3, depth=0):
        """A random valid geometry object, with geometry collections nested
        at most ``max_depth`` deep"""
        kinds = KINDS if depth < max_depth else KINDS[:-1]
        kind = self.rand.choice(kinds)
        if kind == "GeometryCollection":
            return {
                "type": kind,
                "geometries": [
                    self.geometry(max_depth, depth + 1)
                    for _ in range(self.rand.randint(0, 4))
                ],
            }
        r = self.rand.randint
        if kind == "Point":
            coords = self.position()
        elif kind == "MultiPoint":
            coords = self.positions(0, 3)
        elif kind == "LineString":
            coords = self.positions(2, 4)
        elif kind == "MultiLineString":
            coords = [self.positions(2, 4) for _ in range(r(0, 3))]
        elif kind == "Polygon":
            coords = [self.positions(0, 5) for _ in range(r(0, 2))]
        else:
            coords = [
                [self.positions(0, 5) for _ in range(r(0, 2))] for _ in range(r(0, 2))
            ]
        return {"type": kind, "coordinates": coords}

    def feature(self, max_depth=3):
        props = {f"p{i}": self.rand.choice(["x", 1, 2.5, True, None]) for i in range(3)}
        return {
            "type": "Feature",
            "properties": props,
            "geometry": self.geometry(max_depth),
        }


@pytest.fixture
def rand():
    yield Rand()
