"""
Text rendering of populations and statistics.
"""

from typing import Iterable, List

from .data_models import Individual, PopulationStatistics


def format_population(individuals: Iterable[Individual], per_row: int = 1) -> str:
    """
    Render a population as a table of index, fitness and genome.

    Args:
        individuals: Individuals in array order
        per_row: Number of individuals per output line

    Returns:
        Multi-line string
    """
    individuals = list(individuals)
    lines = ["Nr.  fitness  genome"]
    for i in range(0, len(individuals), per_row):
        cells = []
        for j, individual in enumerate(individuals[i:i + per_row], start=i):
            fitness = "-" if individual.fitness is None else f"{individual.fitness:.4g}"
            cells.append(f"{j} \t{fitness} \t{individual.genome}")
        lines.append("\t".join(cells))
    return "\n".join(lines)


def format_statistics(stats: PopulationStatistics, generation: int = None) -> str:
    """
    Render aggregate statistics as a short block.

    Args:
        stats: Statistics to render
        generation: Optional generation number for the header

    Returns:
        Multi-line string
    """
    lines: List[str] = []
    if generation is not None:
        lines.append(f"Generation {generation}")
    lines.extend([
        f"  Mean fitness: {stats.mean:.4f}",
        f"  Max fitness:  {stats.max:.4f}",
        f"  Min fitness:  {stats.min:.4f}",
        f"  Best genome:  {stats.best.genome}",
    ])
    return "\n".join(lines)
