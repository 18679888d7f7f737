"""
Built-in fitness functions used by the command-line driver.

Each factory returns a callable ``(Individual) -> float``; higher is better.
Any other callable with that signature can be passed to ``Population``.
"""

from typing import Callable, Dict, List, Sequence, Tuple

from .data_models import Individual


def onemax() -> Callable[[Individual], float]:
    """Sum of allele values (number of ones for binary genomes)."""
    def fitness(individual: Individual) -> float:
        return float(sum(individual.genome.to_list()))
    return fitness


def target_match(target: Sequence[int]) -> Callable[[Individual], float]:
    """
    Number of positions where the genome equals a target pattern.

    Args:
        target: Allele values to match (same length as the genome)
    """
    target = [int(t) for t in target]

    def fitness(individual: Individual) -> float:
        alleles = individual.genome.to_list()
        if len(alleles) != len(target):
            raise ValueError(
                f"Target length {len(target)} does not match genome length {len(alleles)}"
            )
        return float(sum(1 for a, t in zip(alleles, target) if a == t))
    return fitness


def graph_coloring(edges: Sequence[Tuple[int, int]]) -> Callable[[Individual], float]:
    """
    Negative number of edges whose endpoints share a colour.

    The genome assigns a colour (allele) to every vertex; a proper colouring
    scores 0, the maximum.

    Args:
        edges: Pairs of vertex indices
    """
    edges = [(int(u), int(v)) for u, v in edges]

    def fitness(individual: Individual) -> float:
        genome = individual.genome
        conflicts = sum(1 for u, v in edges if genome.get(u) == genome.get(v))
        return -float(conflicts)
    return fitness


FITNESS_FUNCTIONS: Dict[str, Callable[..., Callable[[Individual], float]]] = {
    'onemax': onemax,
    'target_match': target_match,
    'graph_coloring': graph_coloring,
}


def build_fitness_function(name: str, params: Dict = None) -> Callable[[Individual], float]:
    """
    Look up a built-in fitness function by name.

    Args:
        name: Key of FITNESS_FUNCTIONS
        params: Keyword arguments for the factory

    Returns:
        Fitness callable

    Raises:
        KeyError: If the name is unknown
    """
    if name not in FITNESS_FUNCTIONS:
        raise KeyError(
            f"Unknown fitness function: '{name}'. Available: {', '.join(sorted(FITNESS_FUNCTIONS))}"
        )
    return FITNESS_FUNCTIONS[name](**(params or {}))


def ring_edges(num_vertices: int) -> List[Tuple[int, int]]:
    """Edges of a cycle graph over num_vertices vertices."""
    return [(i, (i + 1) % num_vertices) for i in range(num_vertices)]
