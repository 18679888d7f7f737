"""
Genome representations for the GA engine.

A genome is a fixed-length sequence of discrete alleles in the range
[0, allele_domain). Representations are independent classes satisfying the
``Genome`` protocol; the engine picks one at construction time through
``make_genome``.
"""

from typing import List, Protocol, runtime_checkable
import numpy as np


@runtime_checkable
class Genome(Protocol):
    """Capability set every genome representation provides."""

    allele_domain: int

    def get(self, index: int) -> int:
        ...

    def set(self, index: int, value: int) -> None:
        ...

    def __len__(self) -> int:
        ...

    def copy(self) -> "Genome":
        ...

    def to_list(self) -> List[int]:
        ...


def _check_index(index: int, length: int) -> None:
    if not 0 <= index < length:
        raise IndexError(f"Allele index {index} out of range for genome of length {length}")


def _check_value(value: int, allele_domain: int) -> None:
    if not 0 <= value < allele_domain:
        raise ValueError(f"Allele value {value} outside [0, {allele_domain})")


class BinaryGenome:
    """Bit string genome stored as a numpy boolean array."""

    allele_domain = 2

    def __init__(self, alleles):
        values = np.asarray(alleles, dtype=np.int64)
        if values.ndim != 1:
            raise ValueError("Genome alleles must be a flat sequence")
        for value in values:
            _check_value(int(value), 2)
        self._bits = values.astype(bool)

    def get(self, index: int) -> int:
        _check_index(index, len(self._bits))
        return int(self._bits[index])

    def set(self, index: int, value: int) -> None:
        _check_index(index, len(self._bits))
        _check_value(value, 2)
        self._bits[index] = bool(value)

    __getitem__ = get
    __setitem__ = set

    def __len__(self) -> int:
        return len(self._bits)

    def __iter__(self):
        return (int(b) for b in self._bits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinaryGenome):
            return NotImplemented
        return bool(np.array_equal(self._bits, other._bits))

    def __repr__(self) -> str:
        return f"BinaryGenome({self.to_list()})"

    def __str__(self) -> str:
        return "".join("1" if b else "0" for b in self._bits)

    def to_list(self) -> List[int]:
        return [int(b) for b in self._bits]

    def count_ones(self) -> int:
        return int(self._bits.sum())

    def copy(self) -> "BinaryGenome":
        clone = BinaryGenome.__new__(BinaryGenome)
        clone._bits = self._bits.copy()
        return clone


class IntegerGenome:
    """Bounded-integer genome, alleles in 0 .. allele_domain - 1."""

    def __init__(self, alleles, allele_domain: int):
        if allele_domain < 2:
            raise ValueError(f"allele_domain must be at least 2, got {allele_domain}")
        values = np.array(alleles, dtype=np.int64)
        if values.ndim != 1:
            raise ValueError("Genome alleles must be a flat sequence")
        if values.size and (values.min() < 0 or values.max() >= allele_domain):
            raise ValueError(f"Allele values must lie in [0, {allele_domain})")
        self.allele_domain = allele_domain
        self._alleles = values

    def get(self, index: int) -> int:
        _check_index(index, len(self._alleles))
        return int(self._alleles[index])

    def set(self, index: int, value: int) -> None:
        _check_index(index, len(self._alleles))
        _check_value(value, self.allele_domain)
        self._alleles[index] = value

    __getitem__ = get
    __setitem__ = set

    def __len__(self) -> int:
        return len(self._alleles)

    def __iter__(self):
        return (int(a) for a in self._alleles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntegerGenome):
            return NotImplemented
        return (
            self.allele_domain == other.allele_domain
            and bool(np.array_equal(self._alleles, other._alleles))
        )

    def __repr__(self) -> str:
        return f"IntegerGenome({self.to_list()}, allele_domain={self.allele_domain})"

    def __str__(self) -> str:
        return " ".join(str(a) for a in self)

    def to_list(self) -> List[int]:
        return [int(a) for a in self._alleles]

    def copy(self) -> "IntegerGenome":
        return IntegerGenome(self._alleles.copy(), self.allele_domain)


def make_genome(alleles, allele_domain: int = 2) -> Genome:
    """
    Build the genome representation matching an allele domain.

    Args:
        alleles: Initial allele values
        allele_domain: Number of legal distinct allele values

    Returns:
        BinaryGenome for a domain of 2, IntegerGenome otherwise
    """
    if allele_domain == 2:
        return BinaryGenome(alleles)
    return IntegerGenome(alleles, allele_domain)


def random_genome(length: int, allele_domain: int, rng: np.random.Generator) -> Genome:
    """
    Draw a genome with uniformly distributed alleles.

    Args:
        length: Number of alleles
        allele_domain: Number of legal distinct allele values
        rng: Random number generator

    Returns:
        New genome of the requested length
    """
    if length < 1:
        raise ValueError(f"Genome length must be positive, got {length}")
    return make_genome(rng.integers(0, allele_domain, size=length), allele_domain)
