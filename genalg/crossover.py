"""
Crossover operators for the GA engine.

Pairs the population into disjoint random couples and applies single-point
suffix-swap crossover to each couple with a fixed probability.
"""

from typing import List, Optional, Tuple
import numpy as np

from .data_models import Individual


def random_pairs(size: int, rng: np.random.Generator) -> Tuple[List[Tuple[int, int]], Optional[int]]:
    """
    Split indices 0 .. size-1 into disjoint random pairs.

    Every index is used exactly once. For an odd size one index is left over.

    Args:
        size: Number of individuals
        rng: Random number generator

    Returns:
        Tuple of (pairs, leftover) where leftover is None for even sizes
    """
    order = [int(i) for i in rng.permutation(size)]
    pairs = [(order[k], order[k + 1]) for k in range(0, size - 1, 2)]
    leftover = order[-1] if size % 2 else None
    return pairs, leftover


def draw_crossing_point(length: int, rng: np.random.Generator) -> int:
    """
    Draw a crossing point uniformly from [1, length - 1].

    Position 0 would swap the whole genome, so it is never drawn; at least
    one allele always stays and at least one is exchanged.

    Args:
        length: Genome length (at least 2)
        rng: Random number generator

    Returns:
        Crossing point
    """
    if length < 2:
        raise ValueError(f"Single-point crossover needs genomes of length >= 2, got {length}")
    return int(rng.integers(1, length))


def single_point_crossover(
    parent_a: Individual,
    parent_b: Individual,
    rng: np.random.Generator
) -> int:
    """
    Cross two individuals in place at a random point.

    Args:
        parent_a: First individual
        parent_b: Second individual
        rng: Random number generator

    Returns:
        Crossing point used
    """
    crossing_point = draw_crossing_point(len(parent_a.genome), rng)
    parent_a.cross(parent_b, crossing_point)
    return crossing_point


def crossover_population(
    individuals: List[Individual],
    probability: float,
    rng: np.random.Generator
) -> List[Tuple[int, int, int]]:
    """
    Pair the whole population and cross each pair with a given probability.

    The leftover individual of an odd-sized population is not crossed.
    Genomes of length 1 have no valid crossing point, so nothing is crossed.

    Args:
        individuals: Population, modified in place
        probability: Crossover probability per pair
        rng: Random number generator

    Returns:
        List of (index_a, index_b, crossing_point) for crossings performed
    """
    pairs, _ = random_pairs(len(individuals), rng)

    crossings = []
    for idx_a, idx_b in pairs:
        if rng.random() < probability:
            length = len(individuals[idx_a].genome)
            if length < 2:
                continue
            point = single_point_crossover(individuals[idx_a], individuals[idx_b], rng)
            crossings.append((idx_a, idx_b, point))
    return crossings
