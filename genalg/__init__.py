"""
Elitist Genetic Algorithm Engine

Evolves a fixed-size population of allele sequences toward the optimum of a
caller-supplied fitness function using elitist roulette selection,
single-point crossover and per-allele mutation.

Modules:
- genome: Genome protocol and binary / bounded-integer representations
- data_models: Individual, PopulationStatistics, GenerationRecord
- mutation: Mutation strategies (random reset, flip)
- selection: Elitist roulette and zero-dropping selection strategies
- crossover: Random pairing and single-point crossover
- population: Population engine running the generation cycle
- fitness: Built-in fitness functions for the CLI driver
- config: YAML run configuration loading and validation
- reporting: Text rendering of populations and statistics
- io_utils: Statistics history CSV export/import
- visualization: Fitness-history plots
- cli: Command-line driver
"""

__version__ = "0.1.0"
__author__ = "Evolutionary Computing Team"

from .genome import Genome, BinaryGenome, IntegerGenome, make_genome, random_genome
from .data_models import Individual, PopulationStatistics, GenerationRecord
from .mutation import MutationStrategy, RandomResetMutation, FlipMutation
from .selection import SelectionStrategy, ElitistRouletteSelection, DefaultSelection
from .population import Population, FitnessEvaluationError

__all__ = [
    "Genome",
    "BinaryGenome",
    "IntegerGenome",
    "make_genome",
    "random_genome",
    "Individual",
    "PopulationStatistics",
    "GenerationRecord",
    "MutationStrategy",
    "RandomResetMutation",
    "FlipMutation",
    "SelectionStrategy",
    "ElitistRouletteSelection",
    "DefaultSelection",
    "Population",
    "FitnessEvaluationError",
]
