import random
from typing import Optional, Sequence, Tuple

from .base import CrossoverOperator, MutationOperator, Order


def random_order(n: int, rng: random.Random) -> Order:
    order = list(range(n))
    rng.shuffle(order)
    return order


def cut_points(n: int, rng: random.Random) -> Tuple[int, int]:
    if n < 1:
        return 0, -1
    a = rng.randrange(n)
    b = rng.randrange(n)
    return (a, b) if a <= b else (b, a)


def ordered_crossover(
    parent_a: Sequence[int],
    parent_b: Sequence[int],
    rng: random.Random,
    cut: Optional[Tuple[int, int]] = None,
) -> Order:
    """Order crossover (OX).

    Positions ``start..end`` (inclusive) come from ``parent_a``; every other
    slot is filled left to right with the remaining cities in the order they
    appear in ``parent_b``.
    """
    n = len(parent_a)
    if len(parent_b) != n:
        raise ValueError(f"Parents differ in length: {n} != {len(parent_b)}")
    if n < 2:
        return list(parent_a)
    start, end = cut if cut is not None else cut_points(n, rng)
    start = max(0, min(start, n - 1))
    end = max(start, min(end, n - 1))
    child = [None] * n
    child[start : end + 1] = parent_a[start : end + 1]
    placed = set(child[start : end + 1])
    donor = (c for c in parent_b if c not in placed)
    for i in range(n):
        if child[i] is None:
            child[i] = next(donor)
    return child


def swap_mutation(order: Sequence[int], rng: random.Random) -> Order:
    mutated = list(order)
    n = len(mutated)
    if n < 2:
        return mutated
    i, j = rng.sample(range(n), 2)
    mutated[i], mutated[j] = mutated[j], mutated[i]
    return mutated


class OrderedCrossover(CrossoverOperator):
    name = "ordered"

    def apply(self, parent_a: Sequence[int], parent_b: Sequence[int], rng) -> Order:
        return ordered_crossover(parent_a, parent_b, rng)


class SwapMutation(MutationOperator):
    name = "swap"

    def apply(self, order: Sequence[int], rng) -> Order:
        return swap_mutation(order, rng)
