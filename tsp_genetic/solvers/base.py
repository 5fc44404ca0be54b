import math
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import List, Optional, Sequence


Order = List[int]


class InvalidConfiguration(ValueError):
    """Raised before a run starts when its parameters or city set are unusable."""


@dataclass(frozen=True)
class City:
    name: str
    x: float
    y: float


def leg_length(a: City, b: City) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def tour_length(cities: Sequence[City], order: Sequence[int], closed: bool = False) -> float:
    """Length of the path visiting ``cities`` in ``order``.

    The path is open unless ``closed`` is set, in which case the leg from the
    last city back to the first is included.
    """
    n = len(order)
    if n < 2:
        return 0.0
    dist = 0.0
    for i in range(n - 1):
        dist += leg_length(cities[order[i]], cities[order[i + 1]])
    if closed:
        dist += leg_length(cities[order[-1]], cities[order[0]])
    return float(dist)


class CrossoverOperator(ABC):
    name: str = "crossover"

    @abstractmethod
    def apply(self, parent_a: Sequence[int], parent_b: Sequence[int], rng) -> Order:
        raise NotImplementedError


class MutationOperator(ABC):
    name: str = "mutation"

    @abstractmethod
    def apply(self, order: Sequence[int], rng) -> Order:
        raise NotImplementedError


@dataclass
class SolveResult:
    names: List[str]
    order: Order
    distance: float
    generations: int
    optimum: Optional[float] = None

    @property
    def gap(self) -> float:
        if self.optimum is None or math.isclose(self.optimum, 0.0):
            return float("inf")
        return (self.distance - self.optimum) / self.optimum

    def route(self, sep: str = " -> ") -> str:
        return sep.join(self.names)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["gap"] = None if math.isinf(self.gap) else self.gap
        return data
