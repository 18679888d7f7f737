"""
Run configuration for the command-line driver.

Loads a YAML run file, validates its structure and turns it into a
``RunConfig``. The engine itself never reads files; only the driver does.

Example run file:

    population:
      size: 50
      genome_length: 32
      allele_domain: 2
    rates:
      mutation: 0.01
      crossover: 0.7
    generations: 100
    random_seed: 42
    fitness:
      name: onemax
    output:
      root: runs/onemax
      overwrite: false
      plot: true
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from .fitness import FITNESS_FUNCTIONS


class ConfigValidationError(Exception):
    """Raised when run configuration is invalid."""
    pass


@dataclass
class RunConfig:
    """
    Validated run parameters.

    Attributes:
        size: Population size
        genome_length: Alleles per genome
        allele_domain: Number of legal allele values
        mutation_rate: Per-allele mutation probability
        crossover_rate: Per-pair crossover probability
        generations: Number of generation transitions to run
        fitness_name: Built-in fitness function name
        fitness_params: Keyword arguments for the fitness factory
        random_seed: Seed for the random generator (None picks one)
        output_root: Directory for history CSV and plot (None disables output)
        overwrite: Allow writing into an existing output directory
        plot: Save a fitness-history plot next to the CSV
        report_every: Print statistics every N generations
        show_population_max: Print the final population table up to this size
    """
    size: int
    genome_length: int
    allele_domain: int = 2
    mutation_rate: float = 0.01
    crossover_rate: float = 0.7
    generations: int = 100
    fitness_name: str = 'onemax'
    fitness_params: Dict[str, Any] = field(default_factory=dict)
    random_seed: Optional[int] = None
    output_root: Optional[Path] = None
    overwrite: bool = False
    plot: bool = False
    report_every: int = 10
    show_population_max: int = 20


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is not valid YAML or is empty
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")
    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration must be a mapping")

    return config


def _require_int(value: Any, name: str, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigValidationError(f"'{name}' must be an integer >= {minimum}, got: {value}")
    return value


def _require_rate(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
        raise ConfigValidationError(f"'{name}' must be a number in [0, 1], got: {value}")
    return float(value)


def validate_run_config(config: Dict[str, Any]) -> RunConfig:
    """
    Validate run configuration structure and build a RunConfig.

    Args:
        config: Run configuration dictionary

    Returns:
        RunConfig with defaults filled in

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if 'population' not in config:
        raise ConfigValidationError("Missing required field: 'population'")
    population = config['population']
    if not isinstance(population, dict):
        raise ConfigValidationError("'population' must be a dictionary")

    for required in ('size', 'genome_length'):
        if required not in population:
            raise ConfigValidationError(f"Missing required field: 'population.{required}'")

    size = _require_int(population['size'], 'population.size', 1)
    genome_length = _require_int(population['genome_length'], 'population.genome_length', 1)
    allele_domain = _require_int(population.get('allele_domain', 2), 'population.allele_domain', 2)

    rates = config.get('rates', {})
    if not isinstance(rates, dict):
        raise ConfigValidationError("'rates' must be a dictionary")
    mutation_rate = _require_rate(rates.get('mutation', 0.01), 'rates.mutation')
    crossover_rate = _require_rate(rates.get('crossover', 0.7), 'rates.crossover')

    generations = _require_int(config.get('generations', 100), 'generations', 0)

    seed = config.get('random_seed')
    if seed is not None:
        seed = _require_int(seed, 'random_seed', 0)

    fitness = config.get('fitness', {'name': 'onemax'})
    if not isinstance(fitness, dict) or 'name' not in fitness:
        raise ConfigValidationError("'fitness' must be a dictionary with a 'name' field")
    if fitness['name'] not in FITNESS_FUNCTIONS:
        raise ConfigValidationError(
            f"Unknown fitness function: '{fitness['name']}'. "
            f"Must be one of: {', '.join(sorted(FITNESS_FUNCTIONS))}"
        )
    params = fitness.get('params') or {}
    if not isinstance(params, dict):
        raise ConfigValidationError("'fitness.params' must be a dictionary")
    if fitness['name'] == 'target_match':
        target = params.get('target')
        if not isinstance(target, list) or len(target) != genome_length:
            raise ConfigValidationError(
                f"'fitness.params.target' must be a list of {genome_length} alleles"
            )
        if any(not isinstance(t, int) or not 0 <= t < allele_domain for t in target):
            raise ConfigValidationError(
                f"'fitness.params.target' values must lie in [0, {allele_domain})"
            )
    if fitness['name'] == 'graph_coloring' and 'edges' in params:
        if not isinstance(params['edges'], list):
            raise ConfigValidationError("'fitness.params.edges' must be a list of [u, v] pairs")
        for edge in params['edges']:
            if (not isinstance(edge, list) or len(edge) != 2
                    or any(not isinstance(v, int) or not 0 <= v < genome_length for v in edge)):
                raise ConfigValidationError(
                    f"Invalid edge {edge}: expected [u, v] with vertices in [0, {genome_length})"
                )

    output = config.get('output', {})
    if not isinstance(output, dict):
        raise ConfigValidationError("'output' must be a dictionary")
    output_root = Path(output['root']) if output.get('root') else None
    if output.get('plot') and output_root is None:
        raise ConfigValidationError("'output.plot' requires 'output.root'")

    report_every = _require_int(config.get('report_every', 10), 'report_every', 1)
    show_population_max = _require_int(
        config.get('show_population_max', 20), 'show_population_max', 0
    )

    return RunConfig(
        size=size,
        genome_length=genome_length,
        allele_domain=allele_domain,
        mutation_rate=mutation_rate,
        crossover_rate=crossover_rate,
        generations=generations,
        fitness_name=fitness['name'],
        fitness_params=dict(params),
        random_seed=seed,
        output_root=output_root,
        overwrite=bool(output.get('overwrite', False)),
        plot=bool(output.get('plot', False)),
        report_every=report_every,
        show_population_max=show_population_max,
    )
