"""
Mutation operators for the GA engine.

Implements per-allele mutation strategies. A strategy only needs a
``mutate(genome, rng)`` method; the probability policy lives inside the
strategy, so the engine can swap one for another.
"""

from typing import Dict, Protocol, runtime_checkable
import numpy as np

from .genome import Genome


@runtime_checkable
class MutationStrategy(Protocol):
    """Capability: change a genome in place."""

    def mutate(self, genome: Genome, rng: np.random.Generator) -> None:
        ...


def _check_probability(probability: float) -> float:
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"Mutation probability must lie in [0, 1], got {probability}")
    return float(probability)


class RandomResetMutation:
    """
    Replace each allele, independently with the given probability, by a value
    drawn uniformly from the whole allele domain.

    The drawn value may equal the old one.
    """

    def __init__(self, probability: float):
        self.probability = _check_probability(probability)

    def mutate(self, genome: Genome, rng: np.random.Generator) -> None:
        if self.probability == 0.0:
            return
        domain = genome.allele_domain
        for j in range(len(genome)):
            if rng.random() < self.probability:
                genome.set(j, int(rng.integers(0, domain)))

    def __repr__(self) -> str:
        return f"RandomResetMutation(probability={self.probability})"


class FlipMutation:
    """
    Replace each allele, independently with the given probability, by a
    different value drawn uniformly from the rest of the allele domain.

    For binary genomes this is the classic bit flip.
    """

    def __init__(self, probability: float):
        self.probability = _check_probability(probability)

    def mutate(self, genome: Genome, rng: np.random.Generator) -> None:
        if self.probability == 0.0:
            return
        domain = genome.allele_domain
        for j in range(len(genome)):
            if rng.random() < self.probability:
                offset = int(rng.integers(1, domain))
                genome.set(j, (genome.get(j) + offset) % domain)

    def __repr__(self) -> str:
        return f"FlipMutation(probability={self.probability})"


def mutation_statistics(original: Genome, mutated: Genome) -> Dict:
    """
    Calculate statistics about a mutation.

    Args:
        original: Genome before mutation
        mutated: Genome after mutation

    Returns:
        Dictionary with mutation statistics
    """
    if len(original) != len(mutated):
        raise ValueError("Genomes must have the same length")

    changed = sum(1 for a, b in zip(original.to_list(), mutated.to_list()) if a != b)

    return {
        'total_alleles': len(original),
        'alleles_changed': changed,
        'change_rate': changed / max(len(original), 1),
    }
