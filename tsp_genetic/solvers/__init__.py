from .base import (
    City,
    CrossoverOperator,
    InvalidConfiguration,
    MutationOperator,
    Order,
    SolveResult,
    leg_length,
    tour_length,
)
from .genome import Tour
from .operators import (
    OrderedCrossover,
    SwapMutation,
    cut_points,
    ordered_crossover,
    random_order,
    swap_mutation,
)

__all__ = [
    "City",
    "CrossoverOperator",
    "InvalidConfiguration",
    "MutationOperator",
    "Order",
    "SolveResult",
    "leg_length",
    "tour_length",
    "Tour",
    "OrderedCrossover",
    "SwapMutation",
    "cut_points",
    "ordered_crossover",
    "random_order",
    "swap_mutation",
]
