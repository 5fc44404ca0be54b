"""
Genetic-algorithm solver for the travelling salesperson problem over planar city sets.
"""

__all__ = [
    "data",
    "evaluation",
    "evolutionary",
    "solvers",
]
