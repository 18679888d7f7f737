"""
I/O utilities for the GA engine.

Handles CSV export and import of the per-generation statistics history and
output folder management. Population state itself is never written.
"""

import csv
from pathlib import Path
from typing import List, Union

from .data_models import GenerationRecord


HISTORY_COLUMNS = [
    "generation",
    "min_fitness",
    "max_fitness",
    "mean_fitness",
    "sum_fitness",
    "best_genome",
    "raw_min_fitness",
]


def save_history_csv(
    records: List[GenerationRecord],
    csv_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save generation records to a CSV file.

    Args:
        records: Records in generation order
        csv_path: Output path
        overwrite: Whether to replace an existing file

    Returns:
        Path of the written file

    Raises:
        FileExistsError: If the file exists and overwrite is False
    """
    csv_path = Path(csv_path)

    if csv_path.exists() and not overwrite:
        raise FileExistsError(f"File already exists: {csv_path}")

    csv_path.parent.mkdir(parents=True, exist_ok=True)

    with open(csv_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=HISTORY_COLUMNS)
        writer.writeheader()
        for record in records:
            writer.writerow(record.to_dict())

    return csv_path


def load_history_csv(csv_path: Union[str, Path]) -> List[GenerationRecord]:
    """
    Load generation records from a CSV file written by save_history_csv.

    Args:
        csv_path: Path to CSV file

    Returns:
        List of GenerationRecord

    Raises:
        FileNotFoundError: If CSV file doesn't exist
        ValueError: If CSV format is invalid
    """
    csv_path = Path(csv_path)

    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    records = []
    with open(csv_path, 'r', newline='') as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None or not all(
            col in reader.fieldnames for col in HISTORY_COLUMNS[:-1]
        ):
            raise ValueError(
                f"Invalid CSV format in {csv_path}. Expected columns: {','.join(HISTORY_COLUMNS)}"
            )

        for line_num, row in enumerate(reader, start=2):
            try:
                records.append(GenerationRecord.from_dict(row))
            except (KeyError, ValueError) as e:
                raise ValueError(f"Invalid row at line {line_num} in {csv_path}: {e}")

    return records


def prepare_output_root(output_root: Union[str, Path], overwrite: bool = False) -> Path:
    """
    Create the output directory for a run.

    Args:
        output_root: Directory path
        overwrite: Allow reusing an existing directory

    Returns:
        Path of the directory

    Raises:
        FileExistsError: If the directory exists and overwrite is False
    """
    output_root = Path(output_root)

    if output_root.exists() and not overwrite:
        raise FileExistsError(
            f"Output directory already exists: {output_root}\n"
            f"Set 'output.overwrite: true' in config to overwrite"
        )

    output_root.mkdir(parents=True, exist_ok=overwrite)
    return output_root
