import enum
import math
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .evaluation import PopulationStats, evaluate_population
from .solvers.base import City, CrossoverOperator, InvalidConfiguration, MutationOperator, SolveResult
from .solvers.genome import DEFAULT_CROSSOVER, DEFAULT_MUTATION, Tour


GenerationCallback = Optional[Callable[[int, PopulationStats, Tour], None]]


@dataclass
class EvolutionConfig:
    population_size: int = 100
    mutation_rate: float = 0.02
    elitism: bool = True
    generations: int = 1000
    closed: bool = False
    random_seed: int = 123
    device: str = "cpu"

    @property
    def tournament_size(self) -> int:
        return max(1, self.population_size // 10)

    def validate(self) -> None:
        if isinstance(self.population_size, bool) or not isinstance(self.population_size, int):
            raise InvalidConfiguration(f"population_size must be an integer, got {self.population_size!r}")
        if self.population_size <= 0:
            raise InvalidConfiguration(f"population_size must be positive, got {self.population_size}")
        if isinstance(self.generations, bool) or not isinstance(self.generations, int):
            raise InvalidConfiguration(f"generations must be an integer, got {self.generations!r}")
        if self.generations < 0:
            raise InvalidConfiguration(f"generations must be non-negative, got {self.generations}")
        if isinstance(self.mutation_rate, bool) or not isinstance(self.mutation_rate, (int, float)):
            raise InvalidConfiguration(f"mutation_rate must be a number, got {self.mutation_rate!r}")
        if not (0.0 <= self.mutation_rate <= 1.0):
            raise InvalidConfiguration(f"mutation_rate must lie in [0, 1], got {self.mutation_rate}")


class Phase(enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    EVOLVING = "evolving"
    DONE = "done"


def fittest(population: Sequence[Tour]) -> Tour:
    """Shortest tour in ``population``; the earliest one wins ties."""
    if not population:
        raise ValueError("Cannot pick the fittest tour of an empty population.")
    best = population[0]
    for tour in population[1:]:
        if tour.distance < best.distance:
            best = tour
    return best


def tournament_selection(
    population: Sequence[Tour], rng: random.Random, size: Optional[int] = None
) -> Tour:
    if size is None:
        size = max(1, len(population) // 10)
    contestants = [population[rng.randrange(len(population))] for _ in range(size)]
    return fittest(contestants)


class GeneticAlgorithm:
    def __init__(
        self,
        config: EvolutionConfig,
        rng: random.Random = None,
        crossover: CrossoverOperator = DEFAULT_CROSSOVER,
        mutation: MutationOperator = DEFAULT_MUTATION,
    ):
        config.validate()
        self.cfg = config
        self.rng = rng or random.Random(config.random_seed)
        self.crossover = crossover
        self.mutation = mutation
        self.cities: Sequence[City] = ()
        self.population: List[Tour] = []
        self.history: List[PopulationStats] = []
        self.generation = 0
        self.phase = Phase.UNINITIALIZED

    def initialize_population(self, cities: Sequence[City]) -> None:
        cities = tuple(cities)
        if not cities:
            raise InvalidConfiguration("City set is empty.")
        for c in cities:
            if not (math.isfinite(c.x) and math.isfinite(c.y)):
                raise InvalidConfiguration(f"City {c.name!r} has non-finite coordinates ({c.x}, {c.y}).")
        self.cities = cities
        self.population = [
            Tour.random(cities, self.rng, closed=self.cfg.closed) for _ in range(self.cfg.population_size)
        ]
        self.generation = 0
        self.history = [self.stats()]
        self.phase = Phase.DONE if self.cfg.generations == 0 else Phase.INITIALIZED

    def stats(self) -> PopulationStats:
        return evaluate_population(
            self.cities,
            self.population,
            generation=self.generation,
            closed=self.cfg.closed,
            device=self.cfg.device,
        )

    def select(self) -> Tour:
        return tournament_selection(self.population, self.rng, self.cfg.tournament_size)

    def evolve_population(self) -> None:
        new_pop: List[Tour] = []
        if self.cfg.elitism:
            new_pop.append(fittest(self.population))
        while len(new_pop) < self.cfg.population_size:
            parent_a = self.select()
            parent_b = self.select()
            child = parent_a.crossover(parent_b, self.rng, self.crossover)
            if self.rng.random() < self.cfg.mutation_rate:
                child = child.mutate(self.rng, self.mutation)
            new_pop.append(child)
        self.population = new_pop

    def step(self) -> None:
        if self.phase is Phase.UNINITIALIZED:
            raise RuntimeError("initialize_population() must be called before step().")
        if self.phase is Phase.DONE:
            raise RuntimeError(f"All {self.cfg.generations} generations have already run.")
        self.evolve_population()
        self.generation += 1
        self.history.append(self.stats())
        self.phase = Phase.DONE if self.generation >= self.cfg.generations else Phase.EVOLVING

    def best(self) -> Tour:
        return fittest(self.population)

    def result(self, optimum: Optional[float] = None) -> SolveResult:
        best = self.best()
        return SolveResult(
            names=best.names,
            order=list(best.order),
            distance=best.distance,
            generations=self.generation,
            optimum=optimum,
        )

    def run(
        self,
        cities: Sequence[City],
        on_generation: GenerationCallback = None,
        optimum: Optional[float] = None,
    ) -> SolveResult:
        self.initialize_population(cities)
        while self.phase is not Phase.DONE:
            self.step()
            if on_generation:
                on_generation(self.generation, self.history[-1], self.best())
        return self.result(optimum=optimum)
