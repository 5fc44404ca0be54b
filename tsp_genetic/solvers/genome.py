from random import Random
from typing import List, Optional, Sequence

from .base import City, CrossoverOperator, MutationOperator, Order, tour_length
from .operators import OrderedCrossover, SwapMutation, random_order


DEFAULT_CROSSOVER = OrderedCrossover()
DEFAULT_MUTATION = SwapMutation()


class Tour:
    """One candidate route: a permutation of indices into a shared city list."""

    __slots__ = ("cities", "order", "closed", "_distance")

    def __init__(self, cities: Sequence[City], order: Sequence[int], closed: bool = False):
        order = list(order)
        if sorted(order) != list(range(len(cities))):
            raise ValueError(f"Tour order is not a permutation of {len(cities)} cities: {order}")
        self.cities = cities
        self.order: Order = order
        self.closed = closed
        self._distance: Optional[float] = None

    @staticmethod
    def random(cities: Sequence[City], rng: Random, closed: bool = False) -> "Tour":
        return Tour(cities, random_order(len(cities), rng), closed=closed)

    @property
    def distance(self) -> float:
        if self._distance is None:
            self._distance = tour_length(self.cities, self.order, closed=self.closed)
        return self._distance

    def crossover(
        self, other: "Tour", rng: Random, operator: CrossoverOperator = DEFAULT_CROSSOVER
    ) -> "Tour":
        return Tour(self.cities, operator.apply(self.order, other.order, rng), closed=self.closed)

    def mutate(self, rng: Random, operator: MutationOperator = DEFAULT_MUTATION) -> "Tour":
        return Tour(self.cities, operator.apply(self.order, rng), closed=self.closed)

    @property
    def names(self) -> List[str]:
        return [self.cities[i].name for i in self.order]

    def __len__(self) -> int:
        return len(self.order)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tour):
            return NotImplemented
        return self.order == other.order and self.closed == other.closed

    def __hash__(self) -> int:
        return hash((tuple(self.order), self.closed))

    def __repr__(self) -> str:
        return f"Tour(order={self.order}, distance={self.distance:.4f})"
