"""
Data models for the GA engine.

Core data structures representing individuals, per-generation statistics,
and the generation records kept in the run history.
"""

from dataclasses import dataclass, field
from typing import Optional, Any

from .genome import Genome


@dataclass
class Individual:
    """
    A single candidate solution (individual in GA population).

    Attributes:
        genome: Allele sequence owned exclusively by this individual
        fitness: Score from the last evaluation pass; None while stale
    """
    genome: Genome
    fitness: Optional[float] = None

    def copy(self) -> "Individual":
        """
        Create a deep copy of this individual.

        The genome is copied; the fitness value is carried over verbatim,
        even when stale, so resampled elites keep their parent's score until
        the next evaluation pass.

        Returns:
            New Individual with copied genome
        """
        return Individual(genome=self.genome.copy(), fitness=self.fitness)

    def __len__(self) -> int:
        return len(self.genome)

    @property
    def is_evaluated(self) -> bool:
        """Whether the fitness value is consistent with the genome."""
        return self.fitness is not None

    def mutate(self, strategy, rng) -> None:
        """
        Apply a mutation strategy to this individual's genome in place.

        Args:
            strategy: Object providing ``mutate(genome, rng)``
            rng: Random number generator
        """
        strategy.mutate(self.genome, rng)
        self.fitness = None

    def cross(self, other: "Individual", crossing_point: int) -> None:
        """
        Single-point crossover with another individual, in place on both.

        Every allele from ``crossing_point`` to the end of the genome is
        swapped between ``self`` and ``other``.

        Args:
            other: Crossover partner (same genome length)
            crossing_point: First swapped position, 0 <= crossing_point < length

        Raises:
            ValueError: If genome lengths differ
            IndexError: If crossing_point is out of range
        """
        length = len(self.genome)
        if len(other.genome) != length:
            raise ValueError(
                f"Cannot cross genomes of different lengths ({length} vs {len(other.genome)})"
            )
        if not 0 <= crossing_point < length:
            raise IndexError(
                f"Crossing point {crossing_point} out of range for genome of length {length}"
            )

        for j in range(crossing_point, length):
            mine = self.genome.get(j)
            self.genome.set(j, other.genome.get(j))
            other.genome.set(j, mine)

        self.fitness = None
        other.fitness = None


@dataclass
class PopulationStatistics:
    """
    Aggregate fitness statistics of one generation.

    ``best`` and ``worst`` point into the generation the statistics were
    computed for; once the population advances they no longer belong to the
    current generation and must be re-read.

    Attributes:
        sum: Total fitness
        mean: sum / size
        max: Highest fitness
        min: Lowest fitness
        best: First individual (array order) attaining max
        worst: First individual (array order) attaining min
    """
    sum: float
    mean: float
    max: float
    min: float
    best: Individual
    worst: Individual

    @classmethod
    def from_individuals(cls, individuals: list[Individual]) -> "PopulationStatistics":
        """
        Compute statistics over evaluated individuals.

        Args:
            individuals: Non-empty list of individuals with fitness set

        Returns:
            PopulationStatistics for the list

        Raises:
            ValueError: If the list is empty or holds unevaluated individuals
        """
        if not individuals:
            raise ValueError("Cannot compute statistics of an empty population")

        total = 0.0
        best = worst = None
        for individual in individuals:
            if individual.fitness is None:
                raise ValueError("Cannot compute statistics: individual has no fitness")
            total += individual.fitness
            # Strict comparisons keep the first occurrence of each extreme
            if best is None or individual.fitness > best.fitness:
                best = individual
            if worst is None or individual.fitness < worst.fitness:
                worst = individual

        return cls(
            sum=total,
            mean=total / len(individuals),
            max=best.fitness,
            min=worst.fitness,
            best=best,
            worst=worst,
        )


@dataclass
class GenerationRecord:
    """
    Snapshot of one generation kept in the run history.

    Unlike PopulationStatistics it holds no references into the population,
    only plain values, so it stays valid across generations.

    Attributes:
        generation: Generation number the statistics were taken from
        min_fitness: Lowest normalized fitness
        max_fitness: Highest normalized fitness
        mean_fitness: Mean normalized fitness
        sum_fitness: Total normalized fitness
        best_genome: Allele values of the best individual
        metadata: Additional information (raw minimum, etc.)
    """
    generation: int
    min_fitness: float
    max_fitness: float
    mean_fitness: float
    sum_fitness: float
    best_genome: list[int]
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_statistics(
        cls,
        generation: int,
        stats: PopulationStatistics,
        **metadata: Any
    ) -> "GenerationRecord":
        return cls(
            generation=generation,
            min_fitness=stats.min,
            max_fitness=stats.max,
            mean_fitness=stats.mean,
            sum_fitness=stats.sum,
            best_genome=stats.best.genome.to_list(),
            metadata=dict(metadata),
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert record to dictionary for CSV export.

        Returns:
            Dictionary with string-serializable values
        """
        return {
            "generation": self.generation,
            "min_fitness": self.min_fitness,
            "max_fitness": self.max_fitness,
            "mean_fitness": self.mean_fitness,
            "sum_fitness": self.sum_fitness,
            "best_genome": " ".join(str(a) for a in self.best_genome),
            "raw_min_fitness": self.metadata.get("raw_min_fitness", ""),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GenerationRecord":
        """
        Create record from dictionary (e.g., from CSV).

        Args:
            data: Dictionary with record fields as strings

        Returns:
            GenerationRecord instance
        """
        metadata = {}
        if data.get("raw_min_fitness"):
            metadata["raw_min_fitness"] = float(data["raw_min_fitness"])

        return cls(
            generation=int(data["generation"]),
            min_fitness=float(data["min_fitness"]),
            max_fitness=float(data["max_fitness"]),
            mean_fitness=float(data["mean_fitness"]),
            sum_fitness=float(data["sum_fitness"]),
            best_genome=[int(a) for a in data["best_genome"].split()] if data["best_genome"] else [],
            metadata=metadata,
        )
