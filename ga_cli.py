#!/usr/bin/env python3
"""
Evolve a population described by a YAML run file.

Population size, genome length, allele domain, mutation and crossover
rates and the fitness function come from the run file. The seed, the
number of generations and the output directory can be replaced on the
command line; run ``python3 ga_cli.py --help`` for the options.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from genalg.cli import main


if __name__ == '__main__':
    sys.exit(main())
