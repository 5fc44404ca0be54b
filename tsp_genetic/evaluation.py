from dataclasses import dataclass
from typing import Sequence

import numpy as np
import torch

from .solvers.base import City
from .solvers.genome import Tour


@dataclass
class PopulationStats:
    generation: int
    best: float
    mean: float
    worst: float


def distance_matrix(cities: Sequence[City]) -> np.ndarray:
    pts = np.array([[c.x, c.y] for c in cities], dtype=float).reshape(-1, 2)
    diff = pts[:, None, :] - pts[None, :, :]
    return np.sqrt((diff**2).sum(axis=-1))


def population_distances(
    cities: Sequence[City],
    population: Sequence[Tour],
    closed: bool = False,
    device="cpu",
) -> torch.Tensor:
    """Distances of every tour in ``population``, computed as one batch."""
    if not population:
        return torch.zeros(0, device=device, dtype=torch.float64)
    if len(cities) < 2:
        return torch.zeros(len(population), device=device, dtype=torch.float64)
    dist = torch.from_numpy(distance_matrix(cities)).to(device)
    idx = torch.tensor([t.order for t in population], device=device, dtype=torch.long)
    a = idx
    b = idx.roll(-1, dims=1)
    if not closed:
        a, b = a[:, :-1], b[:, :-1]
    return dist[a, b].sum(dim=1)


def evaluate_population(
    cities: Sequence[City],
    population: Sequence[Tour],
    generation: int = 0,
    closed: bool = False,
    device="cpu",
) -> PopulationStats:
    if not population:
        inf = float("inf")
        return PopulationStats(generation=generation, best=inf, mean=inf, worst=inf)
    dists = population_distances(cities, population, closed=closed, device=device).cpu().numpy()
    return PopulationStats(
        generation=generation,
        best=float(np.min(dists)),
        mean=float(np.mean(dists)),
        worst=float(np.max(dists)),
    )
