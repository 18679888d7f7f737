"""
Fitness-history plots.
"""

from typing import List, Optional, Tuple
import matplotlib.pyplot as plt

from .data_models import GenerationRecord


def plot_fitness_history(
    records: List[GenerationRecord],
    figsize: Tuple[int, int] = (10, 6),
    save_path: Optional[str] = None,
    show: bool = False
):
    """
    Plot min, mean and max (normalized) fitness per generation.

    Args:
        records: Generation records in order
        figsize: Figure size (width, height)
        save_path: Optional path to save the figure
        show: Whether to display the figure interactively

    Returns:
        The matplotlib Figure
    """
    if not records:
        raise ValueError("No generation records to plot")

    generations = [r.generation for r in records]

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(generations, [r.max_fitness for r in records], label="max", color="green")
    ax.plot(generations, [r.mean_fitness for r in records], label="mean", color="blue")
    ax.plot(generations, [r.min_fitness for r in records], label="min", color="red", alpha=0.6)
    ax.fill_between(
        generations,
        [r.min_fitness for r in records],
        [r.max_fitness for r in records],
        color="gray",
        alpha=0.15,
    )

    ax.set_xlabel("Generation")
    ax.set_ylabel("Normalized fitness")
    ax.set_title("Fitness per generation")
    ax.grid(True, alpha=0.3)
    ax.legend()

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Fitness plot saved to: {save_path}")

    if show:
        plt.show()

    return fig
