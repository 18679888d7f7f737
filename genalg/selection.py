"""
Selection operators for the GA engine.

Implements the elitist roulette scheme the engine uses by default and a
simpler zero-fitness-dropping scheme. Both satisfy the ``SelectionStrategy``
protocol: take a list of evaluated individuals and return a new list of the
same size made of fitness-biased copies.
"""

from typing import List, Protocol, Tuple, runtime_checkable
import numpy as np

from .data_models import Individual


@runtime_checkable
class SelectionStrategy(Protocol):
    """Capability: resample a population into a new one of the same size."""

    def select(self, individuals: List[Individual], rng: np.random.Generator) -> List[Individual]:
        ...


def _require_fitness(individuals: List[Individual]) -> None:
    if not individuals:
        raise ValueError("Cannot select from an empty population")
    for individual in individuals:
        if individual.fitness is None:
            raise ValueError("Selection requires evaluated individuals")


def split_elite(individuals: List[Individual]) -> Tuple[List[Individual], List[Individual]]:
    """
    Sort ascending by fitness and split at the midpoint.

    The lower part holds floor(size / 2) individuals, the elite pool gets the
    remainder (the fitter half, plus the middle one for odd sizes). Sorting
    is stable, so ties keep their array order.

    Args:
        individuals: Evaluated individuals

    Returns:
        Tuple of (discarded, elite), both in ascending fitness order
    """
    ranked = sorted(individuals, key=lambda ind: ind.fitness)
    half = len(ranked) // 2
    return ranked[:half], ranked[half:]


def cumulative_selection_table(elite: List[Individual]) -> List[float]:
    """
    Build the cumulative selection table (in percent) over the elite pool.

    table[0] = f_0 / S * 100, table[k] = table[k-1] + f_k / S * 100.
    When S == 0 every member gets an equal share, giving uniform sampling.

    Args:
        elite: Elite pool in ascending fitness order (fitness >= 0)

    Returns:
        List of cumulative percentages, one per elite member
    """
    if not elite:
        raise ValueError("Elite pool is empty")

    total = sum(ind.fitness for ind in elite)

    table = []
    cumulative = 0.0
    for individual in elite:
        if total > 0:
            cumulative += individual.fitness / total * 100
        else:
            cumulative += 100 / len(elite)
        table.append(cumulative)
    return table


def roulette_pick(table: List[float], draw: float) -> int:
    """
    Find the first table entry whose cumulative value exceeds the draw.

    Args:
        table: Cumulative percentages
        draw: Value in [0, 100)

    Returns:
        Index into the table; the last index if rounding left the draw at or
        above the final entry
    """
    for k, threshold in enumerate(table):
        if draw < threshold:
            return k
    return len(table) - 1


class ElitistRouletteSelection:
    """
    Elitist selection with roulette-wheel resampling.

    The lower half of the population (by fitness) is discarded; each slot of
    the new population is a copy of an elite member drawn with replacement,
    with probability proportional to its fitness. Fitness values must be
    non-negative (the engine normalizes before selecting).

    Attributes:
        last_table: Cumulative table built by the most recent ``select`` call
    """

    def __init__(self):
        self.last_table: List[float] = []

    def select(self, individuals: List[Individual], rng: np.random.Generator) -> List[Individual]:
        _require_fitness(individuals)
        if min(ind.fitness for ind in individuals) < 0:
            raise ValueError("Elitist roulette selection requires non-negative fitness")

        _, elite = split_elite(individuals)
        table = cumulative_selection_table(elite)
        self.last_table = table

        selected = []
        for _ in range(len(individuals)):
            draw = rng.random() * 100
            selected.append(elite[roulette_pick(table, draw)].copy())
        return selected

    def __repr__(self) -> str:
        return "ElitistRouletteSelection()"


class DefaultSelection:
    """
    Drop zero-fitness individuals and resample the survivors.

    Survivors are drawn with replacement, proportionally to fitness, until the
    original size is reached. If nobody survives (all fitness values are
    zero) the input is resampled uniformly so the size is still preserved.
    Negative fitness counts as zero.
    """

    def select(self, individuals: List[Individual], rng: np.random.Generator) -> List[Individual]:
        _require_fitness(individuals)

        survivors = [ind for ind in individuals if ind.fitness > 0]
        if not survivors:
            picks = rng.integers(0, len(individuals), size=len(individuals))
            return [individuals[int(i)].copy() for i in picks]

        weights = np.array([ind.fitness for ind in survivors], dtype=float)
        weights_normalized = weights / np.sum(weights)
        picks = rng.choice(len(survivors), size=len(individuals), p=weights_normalized)
        return [survivors[int(i)].copy() for i in picks]

    def __repr__(self) -> str:
        return "DefaultSelection()"
