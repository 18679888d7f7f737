"""
Population and generational evolution engine.

One call to ``Population.advance_generation`` runs the full cycle:

    1. evaluate fitness of every individual
    2. shift fitness so the minimum is 0
    3. elitist selection + roulette resampling into a new generation
    4. single-point crossover over random disjoint pairs
    5. per-allele mutation
    6. re-evaluate fitness

Steps 3-6 run on a fresh list that replaces the current generation only
when it is complete, so a failing fitness function never leaves the
population empty or half-built.
"""

import math
from numbers import Real
from typing import Callable, List, Optional, Tuple
import numpy as np

from .data_models import Individual, PopulationStatistics, GenerationRecord
from .genome import random_genome
from .mutation import MutationStrategy, RandomResetMutation
from .selection import SelectionStrategy, ElitistRouletteSelection
from .crossover import crossover_population


FitnessFunction = Callable[[Individual], float]


class FitnessEvaluationError(RuntimeError):
    """Raised when the fitness function fails or returns an unusable value."""

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index


def evaluate_individuals(individuals: List[Individual], fitness_function: FitnessFunction) -> None:
    """
    Assign a fresh fitness value to every individual.

    Args:
        individuals: Individuals to evaluate, updated in place
        fitness_function: Callable mapping an Individual to a real number

    Raises:
        FitnessEvaluationError: If the function raises or returns a non-real or non-finite value
    """
    for i, individual in enumerate(individuals):
        try:
            value = fitness_function(individual)
        except Exception as e:
            raise FitnessEvaluationError(
                f"Fitness function failed for individual {i}: {e}", index=i
            ) from e

        if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
            raise FitnessEvaluationError(
                f"Fitness function returned {value!r} for individual {i}", index=i
            )
        individual.fitness = float(value)


def normalize_fitness(individuals: List[Individual]) -> float:
    """
    Shift all fitness values so the minimum becomes 0.

    Args:
        individuals: Evaluated individuals, updated in place

    Returns:
        The minimum that was subtracted

    Raises:
        FitnessEvaluationError: If a shifted value overflows; no fitness is changed
    """
    minimum = min(ind.fitness for ind in individuals)
    shifted = [ind.fitness - minimum for ind in individuals]
    for i, value in enumerate(shifted):
        if not math.isfinite(value):
            raise FitnessEvaluationError(
                f"Fitness of individual {i} overflows when shifted by {minimum!r}", index=i
            )
    for individual, value in zip(individuals, shifted):
        individual.fitness = value
    return minimum


class Population:
    """
    Fixed-size population evolved by elitist roulette selection, single-point
    crossover and per-allele mutation.

    The engine is synchronous and not thread-safe. ``statistics.best`` and
    ``statistics.worst`` refer to individuals of the generation they were
    computed for; read them again after every ``advance_generation``.

    Attributes:
        size: Number of individuals
        genome_length: Number of alleles per genome
        allele_domain: Number of legal distinct allele values
        mutation_probability: Per-allele mutation probability; a custom
            mutation_strategy with a ``probability`` attribute must agree with it
        crossover_probability: Per-pair crossover probability
        fitness_function: Callable mapping an Individual to a real number
        mutation_strategy: Applied to every individual each generation
        selection_strategy: Builds the next generation from the current one
        rng: Random number generator used by every draw
        generation: Number of completed generation transitions
        history: One GenerationRecord per completed transition
    """

    def __init__(
        self,
        size: int,
        genome_length: int,
        mutation_probability: float,
        crossover_probability: float,
        fitness_function: FitnessFunction,
        allele_domain: int = 2,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        mutation_strategy: Optional[MutationStrategy] = None,
        selection_strategy: Optional[SelectionStrategy] = None,
        individuals: Optional[List[Individual]] = None,
    ):
        if size < 1:
            raise ValueError(f"Population size must be positive, got {size}")
        if genome_length < 1:
            raise ValueError(f"Genome length must be positive, got {genome_length}")
        if allele_domain < 2:
            raise ValueError(f"allele_domain must be at least 2, got {allele_domain}")
        for name, value in (("mutation", mutation_probability), ("crossover", crossover_probability)):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} probability must lie in [0, 1], got {value}")
        if not callable(fitness_function):
            raise TypeError("fitness_function must be callable")
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        strategy_probability = getattr(mutation_strategy, "probability", None)
        if strategy_probability is not None and strategy_probability != mutation_probability:
            raise ValueError(
                f"mutation_strategy probability {strategy_probability} does not match "
                f"mutation_probability {mutation_probability}"
            )

        self.size = size
        self.genome_length = genome_length
        self.allele_domain = allele_domain
        self.mutation_probability = float(mutation_probability)
        self.crossover_probability = float(crossover_probability)
        self.fitness_function = fitness_function
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.mutation_strategy = mutation_strategy or RandomResetMutation(self.mutation_probability)
        self.selection_strategy = selection_strategy or ElitistRouletteSelection()

        self.generation = 0
        self.history: List[GenerationRecord] = []
        self._statistics: Optional[PopulationStatistics] = None

        if individuals is not None:
            self._individuals = self._check_individuals(individuals)
        else:
            self._individuals = [
                Individual(random_genome(genome_length, allele_domain, self.rng))
                for _ in range(size)
            ]

    def _check_individuals(self, individuals: List[Individual]) -> List[Individual]:
        if len(individuals) != self.size:
            raise ValueError(f"Expected {self.size} individuals, got {len(individuals)}")
        for individual in individuals:
            if len(individual.genome) != self.genome_length:
                raise ValueError(
                    f"Genome length {len(individual.genome)} does not match {self.genome_length}"
                )
            if individual.genome.allele_domain != self.allele_domain:
                raise ValueError(
                    f"Allele domain {individual.genome.allele_domain} does not match {self.allele_domain}"
                )
        return list(individuals)

    @property
    def individuals(self) -> Tuple[Individual, ...]:
        """Read-only view of the current generation."""
        return tuple(self._individuals)

    def __len__(self) -> int:
        return len(self._individuals)

    def __iter__(self):
        return iter(tuple(self._individuals))

    @property
    def statistics(self) -> Optional[PopulationStatistics]:
        """Statistics from the most recent computation, None before the first one."""
        return self._statistics

    @property
    def selection_table(self) -> List[float]:
        """Cumulative selection table of the last elitist selection (percent)."""
        return list(getattr(self.selection_strategy, "last_table", []))

    def evaluate_fitness(self) -> None:
        """Recompute the fitness of every individual of the current generation."""
        evaluate_individuals(self._individuals, self.fitness_function)

    def normalize_fitness(self) -> float:
        """
        Shift current fitness values so the minimum is 0.

        Returns:
            The minimum that was subtracted
        """
        return normalize_fitness(self._individuals)

    def compute_statistics(self) -> PopulationStatistics:
        """
        Compute sum, mean, min and max over current fitness values.

        Returns:
            Fresh PopulationStatistics (also stored as ``statistics``)
        """
        self._statistics = PopulationStatistics.from_individuals(self._individuals)
        return self._statistics

    def best_individual(self) -> Individual:
        """
        Fittest individual of the current generation by its current fitness.

        Evaluates the population first if any fitness value is stale.
        """
        if any(not ind.is_evaluated for ind in self._individuals):
            self.evaluate_fitness()
        return PopulationStatistics.from_individuals(self._individuals).best

    def advance_generation(self) -> PopulationStatistics:
        """
        Run one full generation transition.

        Returns:
            Statistics of the normalized generation that was selected from

        Raises:
            FitnessEvaluationError: If the fitness function fails or the
                fitness values cannot be shifted; the current generation
                stays in place with its raw fitness values and previous
                statistics
        """
        self.evaluate_fitness()

        raw_fitness = [ind.fitness for ind in self._individuals]
        previous_statistics = self._statistics
        has_table = hasattr(self.selection_strategy, "last_table")
        previous_table = list(self.selection_strategy.last_table) if has_table else None
        try:
            raw_minimum = self.normalize_fitness()
            stats = self.compute_statistics()

            offspring = self.selection_strategy.select(self._individuals, self.rng)
            if len(offspring) != self.size:
                raise RuntimeError(
                    f"Selection returned {len(offspring)} individuals, expected {self.size}"
                )

            crossover_population(offspring, self.crossover_probability, self.rng)

            for individual in offspring:
                individual.mutate(self.mutation_strategy, self.rng)

            evaluate_individuals(offspring, self.fitness_function)
        except Exception:
            for individual, value in zip(self._individuals, raw_fitness):
                individual.fitness = value
            self._statistics = previous_statistics
            if has_table:
                self.selection_strategy.last_table = previous_table
            raise

        self.history.append(
            GenerationRecord.from_statistics(self.generation, stats, raw_min_fitness=raw_minimum)
        )
        self._individuals = offspring
        self.generation += 1
        return stats

    def run(
        self,
        generations: int,
        callback: Optional[Callable[["Population", PopulationStatistics], Optional[bool]]] = None
    ) -> List[GenerationRecord]:
        """
        Advance several generations.

        Args:
            generations: Number of transitions to run
            callback: Called after each transition with (population, statistics);
                returning True stops the run early

        Returns:
            Generation records produced during this call
        """
        if generations < 0:
            raise ValueError(f"generations must be non-negative, got {generations}")

        start = len(self.history)
        for _ in range(generations):
            stats = self.advance_generation()
            if callback is not None and callback(self, stats):
                break
        return self.history[start:]

    def reinitialize(self, rng: Optional[np.random.Generator] = None) -> None:
        """
        Draw fresh random genomes for every individual, keeping the size.

        Args:
            rng: Generator for the draws (defaults to the population's own)
        """
        rng = rng if rng is not None else self.rng
        self._individuals = [
            Individual(random_genome(self.genome_length, self.allele_domain, rng))
            for _ in range(self.size)
        ]
        self._statistics = None

    def __repr__(self) -> str:
        return (
            f"Population(size={self.size}, genome_length={self.genome_length}, "
            f"allele_domain={self.allele_domain}, generation={self.generation})"
        )
