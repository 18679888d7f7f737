"""
CLI module for the GA engine.

Loads a run configuration, builds the population and runs the requested
number of generations, printing progress and writing the statistics history.
"""

import argparse
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional
import numpy as np

from .config import (
    ConfigValidationError,
    RunConfig,
    load_run_config,
    validate_run_config,
)
from .fitness import build_fitness_function, ring_edges
from .population import Population
from .reporting import format_population, format_statistics
from .io_utils import save_history_csv, prepare_output_root


def build_population(run_config: RunConfig, seed: Optional[int] = None) -> Population:
    """
    Create the population described by a run configuration.

    Args:
        run_config: Validated run configuration
        seed: Seed overriding run_config.random_seed

    Returns:
        Population ready to evolve
    """
    params = dict(run_config.fitness_params)
    if run_config.fitness_name == 'graph_coloring' and 'edges' not in params:
        params['edges'] = ring_edges(run_config.genome_length)

    fitness_function = build_fitness_function(run_config.fitness_name, params)

    return Population(
        size=run_config.size,
        genome_length=run_config.genome_length,
        mutation_probability=run_config.mutation_rate,
        crossover_probability=run_config.crossover_rate,
        fitness_function=fitness_function,
        allele_domain=run_config.allele_domain,
        seed=seed if seed is not None else run_config.random_seed,
    )


def run_evolution(run_config: RunConfig) -> Population:
    """
    Evolve a population according to a run configuration.

    Args:
        run_config: Validated run configuration

    Returns:
        The evolved population
    """
    print("=" * 70)
    print("EVOLUTION")
    print("=" * 70)

    seed = run_config.random_seed
    if seed is None:
        seed = int(np.random.randint(0, 2**31))
    print(f"Random seed: {seed}")

    population = build_population(run_config, seed=seed)
    print(f"Population: {population.size} individuals, genome length {population.genome_length}, "
          f"{population.allele_domain} allele values")
    print(f"Fitness: {run_config.fitness_name}")
    print(f"Mutation rate: {population.mutation_probability}, "
          f"crossover rate: {population.crossover_probability}\n")

    output_root = None
    if run_config.output_root is not None:
        output_root = prepare_output_root(run_config.output_root, run_config.overwrite)
        print(f"Output directory: {output_root}\n")

    total = run_config.generations

    def report(pop: Population, stats) -> None:
        if pop.generation % run_config.report_every == 0 or pop.generation == total:
            print(format_statistics(stats, pop.generation - 1))
            print(f"  Progress: {pop.generation}/{total} generations")

    population.run(total, callback=report)

    best = population.best_individual()

    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Generations: {population.generation}")
    print(f"Best fitness: {best.fitness}")
    print(f"Best genome: {best.genome}")

    if population.size <= run_config.show_population_max:
        print()
        print(format_population(population.individuals))

    if output_root is not None:
        history_path = save_history_csv(
            population.history, output_root / 'history.csv', overwrite=run_config.overwrite
        )
        print(f"History: {history_path}")

        if run_config.plot and population.history:
            from .visualization import plot_fitness_history
            plot_fitness_history(population.history, save_path=str(output_root / 'fitness.png'))

    return population


def apply_overrides(run_config: RunConfig, overrides: Optional[Dict[str, Any]] = None) -> RunConfig:
    """
    Replace run parameters given on the command line.

    Args:
        run_config: Validated run configuration
        overrides: Mapping of RunConfig field names to values; None values are ignored

    Returns:
        New RunConfig with the overrides applied

    Raises:
        ConfigValidationError: If an override names an unknown field or has an invalid value
    """
    if not overrides:
        return run_config

    changes = {key: value for key, value in overrides.items() if value is not None}
    unknown = set(changes) - {f.name for f in fields(RunConfig)}
    if unknown:
        raise ConfigValidationError(f"Unknown override(s): {', '.join(sorted(unknown))}")

    if 'generations' in changes and changes['generations'] < 0:
        raise ConfigValidationError(
            f"'generations' must be an integer >= 0, got: {changes['generations']}"
        )
    if 'random_seed' in changes and changes['random_seed'] < 0:
        raise ConfigValidationError(
            f"'random_seed' must be an integer >= 0, got: {changes['random_seed']}"
        )
    if 'output_root' in changes:
        changes['output_root'] = Path(changes['output_root'])

    updated = replace(run_config, **changes)
    if updated.plot and updated.output_root is None:
        raise ConfigValidationError("Plotting requires an output directory")
    return updated


def run_from_config(config_path: str, overrides: Optional[Dict[str, Any]] = None) -> Population:
    """
    Load run configuration and evolve.

    This is the main entry point called by ga_cli.py.

    Args:
        config_path: Path to run configuration YAML file
        overrides: Command-line replacements for RunConfig fields

    Returns:
        The evolved population

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config or overrides are invalid
        FitnessEvaluationError: If the fitness function fails
    """
    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)

    print("Validating configuration...")
    run_config = apply_overrides(validate_run_config(config), overrides)

    population = run_evolution(run_config)

    print("\nRun completed successfully!")
    return population


def build_parser() -> argparse.ArgumentParser:
    """Command-line parser for ga_cli.py."""
    parser = argparse.ArgumentParser(
        description="Evolve a population with elitist roulette selection, "
                    "single-point crossover and per-allele mutation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 ga_cli.py examples/onemax.yaml                     # Run as configured
  python3 ga_cli.py examples/onemax.yaml --seed 7            # Reproduce a run with seed 7
  python3 ga_cli.py examples/onemax.yaml --generations 500   # Run longer than configured
  python3 ga_cli.py examples/graph_coloring.yaml --output runs/ring --overwrite
        """
    )

    parser.add_argument(
        'config',
        nargs='?',
        help='Run configuration YAML file'
    )

    parser.add_argument(
        '--config', '-c',
        dest='config_option',
        help='Run configuration YAML file (alternative to the positional argument)'
    )

    parser.add_argument(
        '--seed', '-s',
        type=int,
        help='Random seed, replacing random_seed from the run file'
    )

    parser.add_argument(
        '--generations', '-g',
        type=int,
        help='Number of generations, replacing generations from the run file'
    )

    parser.add_argument(
        '--output', '-o',
        help='Directory for history.csv (and fitness.png with --plot)'
    )

    parser.add_argument(
        '--overwrite',
        action='store_true',
        help='Allow writing into an existing output directory'
    )

    parser.add_argument(
        '--plot',
        action='store_true',
        help='Save a fitness-history plot (requires an output directory)'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse command-line arguments and run the evolution.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    config_path = args.config_option or args.config
    if config_path is None:
        parser.print_help()
        return 1

    overrides = {
        'random_seed': args.seed,
        'generations': args.generations,
        'output_root': args.output,
        'overwrite': True if args.overwrite else None,
        'plot': True if args.plot else None,
    }

    try:
        run_from_config(config_path, overrides)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 1
    except Exception as e:
        print(f"\nError: {e}")
        return 1
    return 0
