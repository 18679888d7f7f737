"""
Tests for GA operations: mutation, selection and crossover.
"""

import unittest
import numpy as np

from genalg.genome import BinaryGenome, IntegerGenome
from genalg.data_models import Individual
from genalg.mutation import (
    MutationStrategy,
    RandomResetMutation,
    FlipMutation,
    mutation_statistics,
)
from genalg.selection import (
    SelectionStrategy,
    ElitistRouletteSelection,
    DefaultSelection,
    split_elite,
    cumulative_selection_table,
    roulette_pick,
)
from genalg.crossover import (
    random_pairs,
    draw_crossing_point,
    single_point_crossover,
    crossover_population,
)


def make_individual(alleles, fitness=None, allele_domain=2):
    if allele_domain == 2:
        genome = BinaryGenome(alleles)
    else:
        genome = IntegerGenome(alleles, allele_domain)
    return Individual(genome, fitness=fitness)


class TestMutation(unittest.TestCase):
    """Test mutation strategies."""

    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_random_reset_zero_probability(self):
        """Test no allele changes with probability 0."""
        genome = IntegerGenome([0, 1, 2, 3, 4], allele_domain=5)
        RandomResetMutation(0.0).mutate(genome, self.rng)
        self.assertEqual(genome.to_list(), [0, 1, 2, 3, 4])

    def test_random_reset_full_probability_stays_in_domain(self):
        """Test every allele is redrawn within the domain."""
        genome = IntegerGenome([0] * 200, allele_domain=4)
        RandomResetMutation(1.0).mutate(genome, self.rng)

        values = genome.to_list()
        self.assertEqual(len(values), 200)
        self.assertTrue(all(0 <= v < 4 for v in values))
        # 200 uniform draws over 4 values hit more than one value
        self.assertGreater(len(set(values)), 1)

    def test_flip_always_changes(self):
        """Test flip mutation never keeps the old value."""
        genome = IntegerGenome([1] * 50, allele_domain=3)
        FlipMutation(1.0).mutate(genome, self.rng)
        self.assertTrue(all(v in (0, 2) for v in genome.to_list()))

        bits = BinaryGenome([0, 1, 0, 1])
        FlipMutation(1.0).mutate(bits, self.rng)
        self.assertEqual(bits.to_list(), [1, 0, 1, 0])

    def test_invalid_probability(self):
        """Test probabilities outside [0, 1] are rejected."""
        with self.assertRaises(ValueError):
            RandomResetMutation(1.5)
        with self.assertRaises(ValueError):
            FlipMutation(-0.1)

    def test_protocol(self):
        """Test strategies satisfy the MutationStrategy protocol."""
        self.assertIsInstance(RandomResetMutation(0.1), MutationStrategy)
        self.assertIsInstance(FlipMutation(0.1), MutationStrategy)

    def test_individual_mutate_marks_fitness_stale(self):
        """Test Individual.mutate applies the strategy in place."""
        individual = make_individual([0, 0, 0, 0], fitness=4.0)
        individual.mutate(FlipMutation(1.0), self.rng)

        self.assertEqual(individual.genome.to_list(), [1, 1, 1, 1])
        self.assertIsNone(individual.fitness)

    def test_mutation_statistics(self):
        """Test counting changed alleles."""
        stats = mutation_statistics(BinaryGenome([0, 0, 1, 1]), BinaryGenome([0, 1, 1, 0]))

        self.assertEqual(stats['total_alleles'], 4)
        self.assertEqual(stats['alleles_changed'], 2)
        self.assertAlmostEqual(stats['change_rate'], 0.5)


class TestElitistSelection(unittest.TestCase):
    """Test elitist roulette selection and its helpers."""

    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_split_elite_even(self):
        """Test the fitter half becomes the elite pool."""
        individuals = [make_individual([0], f) for f in (3.0, 0.0, 2.0, 1.0)]
        lower, elite = split_elite(individuals)

        self.assertEqual([i.fitness for i in lower], [0.0, 1.0])
        self.assertEqual([i.fitness for i in elite], [2.0, 3.0])

    def test_split_elite_odd(self):
        """Test the elite pool gets the extra individual for odd sizes."""
        individuals = [make_individual([0], f) for f in (4.0, 0.0, 2.0, 1.0, 3.0)]
        lower, elite = split_elite(individuals)

        self.assertEqual(len(lower), 2)
        self.assertEqual([i.fitness for i in elite], [2.0, 3.0, 4.0])

    def test_cumulative_table(self):
        """Test cumulative percentages over the elite pool."""
        elite = [make_individual([0], f) for f in (1.0, 1.0, 2.0)]
        table = cumulative_selection_table(elite)

        self.assertEqual(len(table), 3)
        self.assertAlmostEqual(table[0], 25.0)
        self.assertAlmostEqual(table[1], 50.0)
        self.assertAlmostEqual(table[2], 100.0)

    def test_cumulative_table_zero_sum_is_uniform(self):
        """Test all-zero elite fitness gives equal shares."""
        elite = [make_individual([0], 0.0) for _ in range(4)]
        table = cumulative_selection_table(elite)

        for expected, value in zip((25.0, 50.0, 75.0, 100.0), table):
            self.assertAlmostEqual(value, expected)

    def test_roulette_pick(self):
        """Test the first entry exceeding the draw is chosen."""
        table = [25.0, 50.0, 100.0]

        self.assertEqual(roulette_pick(table, 0.0), 0)
        self.assertEqual(roulette_pick(table, 25.0), 1)
        self.assertEqual(roulette_pick(table, 99.99), 2)
        # Rounding below 100 falls back to the last member
        self.assertEqual(roulette_pick([33.3, 66.6, 99.9999], 99.99995), 2)

    def test_roulette_pick_skips_zero_width_entries(self):
        """Test zero-fitness elite members are never drawn when others are positive."""
        table = [0.0, 0.0, 100.0]
        for draw in (0.0, 10.0, 99.0):
            self.assertEqual(roulette_pick(table, draw), 2)

    def test_two_individuals_keep_dominant(self):
        """Test a strictly dominated individual is excluded at size 2."""
        individuals = [make_individual([0], 0.0), make_individual([1], 1.0)]
        selected = ElitistRouletteSelection().select(individuals, self.rng)

        self.assertEqual(len(selected), 2)
        for individual in selected:
            self.assertEqual(individual.genome.to_list(), [1])
            self.assertEqual(individual.fitness, 1.0)

    def test_selected_are_copies(self):
        """Test selection returns deep copies of elite members."""
        individuals = [make_individual([0, 0], 0.0), make_individual([1, 1], 5.0)]
        selected = ElitistRouletteSelection().select(individuals, self.rng)

        for individual in selected:
            self.assertIsNot(individual, individuals[1])
            self.assertIsNot(individual.genome, individuals[1].genome)

    def test_size_preserved_and_only_elite_selected(self):
        """Test new population size and that only the upper half reproduces."""
        individuals = [make_individual([i % 2, i // 2 % 2, i // 4 % 2], float(i)) for i in range(8)]
        selection = ElitistRouletteSelection()
        selected = selection.select(individuals, self.rng)

        self.assertEqual(len(selected), 8)
        elite_genomes = [ind.genome for ind in individuals[4:]]
        for individual in selected:
            self.assertIn(individual.genome, elite_genomes)
        self.assertEqual(len(selection.last_table), 4)
        self.assertAlmostEqual(selection.last_table[-1], 100.0)

    def test_all_zero_fitness(self):
        """Test a fully tied population still yields a full population."""
        individuals = [make_individual([i % 2], 0.0) for i in range(6)]
        selected = ElitistRouletteSelection().select(individuals, self.rng)
        self.assertEqual(len(selected), 6)

    def test_rejects_negative_and_unevaluated(self):
        """Test selection preconditions."""
        with self.assertRaises(ValueError):
            ElitistRouletteSelection().select([make_individual([0], -1.0)], self.rng)
        with self.assertRaises(ValueError):
            ElitistRouletteSelection().select([make_individual([0])], self.rng)
        with self.assertRaises(ValueError):
            ElitistRouletteSelection().select([], self.rng)

    def test_protocol(self):
        """Test strategies satisfy the SelectionStrategy protocol."""
        self.assertIsInstance(ElitistRouletteSelection(), SelectionStrategy)
        self.assertIsInstance(DefaultSelection(), SelectionStrategy)


class TestDefaultSelection(unittest.TestCase):
    """Test the zero-fitness-dropping selection."""

    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_population_keeps_size(self):
        """Test population after selection has the same size."""
        individuals = [make_individual([0], 0.0), make_individual([1], 1.0)]
        selected = DefaultSelection().select(individuals, self.rng)
        self.assertEqual(len(selected), 2)

    def test_zero_fitness_not_selected(self):
        """Test individuals with zero fitness are not selected."""
        individuals = [make_individual([0], 0.0), make_individual([1], 1.0)]
        selected = DefaultSelection().select(individuals, self.rng)

        for individual in selected:
            self.assertEqual(individual.genome.count_ones(), 1)

    def test_zero_fitness_not_selected_even_if_there_are_more(self):
        """Test a single survivor fills every slot."""
        individuals = [make_individual([0], 0.0) for _ in range(3)] + [make_individual([1], 1.0)]
        selected = DefaultSelection().select(individuals, self.rng)

        self.assertEqual(len(selected), 4)
        for individual in selected:
            self.assertEqual(individual.genome.count_ones(), 1)

    def test_all_zero_fitness(self):
        """Test all-zero input still returns a full population."""
        individuals = [make_individual([i % 2], 0.0) for i in range(5)]
        selected = DefaultSelection().select(individuals, self.rng)
        self.assertEqual(len(selected), 5)


class TestCrossover(unittest.TestCase):
    """Test pairing and single-point crossover."""

    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_random_pairs_even(self):
        """Test every index is paired exactly once."""
        pairs, leftover = random_pairs(10, self.rng)

        self.assertEqual(len(pairs), 5)
        self.assertIsNone(leftover)
        used = [i for pair in pairs for i in pair]
        self.assertEqual(sorted(used), list(range(10)))

    def test_random_pairs_odd(self):
        """Test one index is left over for odd sizes."""
        pairs, leftover = random_pairs(7, self.rng)

        self.assertEqual(len(pairs), 3)
        used = [i for pair in pairs for i in pair] + [leftover]
        self.assertEqual(sorted(used), list(range(7)))

    def test_crossing_point_range(self):
        """Test crossing points lie in [1, length - 1]."""
        points = {draw_crossing_point(5, self.rng) for _ in range(200)}
        self.assertEqual(points, {1, 2, 3, 4})

        self.assertEqual(draw_crossing_point(2, self.rng), 1)
        with self.assertRaises(ValueError):
            draw_crossing_point(1, self.rng)

    def test_single_point_crossover(self):
        """Test a random crossing swaps a non-empty proper suffix."""
        a = make_individual([0, 0, 0, 0, 0, 0])
        b = make_individual([1, 1, 1, 1, 1, 1])

        point = single_point_crossover(a, b, self.rng)

        self.assertEqual(a.genome.to_list(), [0] * point + [1] * (6 - point))
        self.assertEqual(b.genome.to_list(), [1] * point + [0] * (6 - point))

    def test_crossover_population_probability_zero(self):
        """Test nothing is crossed with probability 0."""
        individuals = [make_individual([i % 2] * 4) for i in range(6)]
        before = [ind.genome.to_list() for ind in individuals]

        crossings = crossover_population(individuals, 0.0, self.rng)

        self.assertEqual(crossings, [])
        self.assertEqual([ind.genome.to_list() for ind in individuals], before)

    def test_crossover_population_probability_one(self):
        """Test every pair is crossed with probability 1."""
        individuals = [make_individual([i % 2] * 4) for i in range(7)]

        crossings = crossover_population(individuals, 1.0, self.rng)

        self.assertEqual(len(crossings), 3)
        for idx_a, idx_b, point in crossings:
            self.assertTrue(1 <= point <= 3)
            self.assertNotEqual(idx_a, idx_b)
            self.assertEqual(len(individuals[idx_a].genome), 4)

    def test_crossover_population_leftover_untouched(self):
        """Test the unpaired individual of an odd-sized list is not crossed."""
        _, leftover = random_pairs(5, np.random.default_rng(7))
        individuals = [
            make_individual([0, 0, 0, 0, 0, 0] if i % 2 else [1, 1, 1, 1, 1, 1], fitness=1.0)
            for i in range(5)
        ]
        before = [ind.genome.to_list() for ind in individuals]

        crossings = crossover_population(individuals, 1.0, np.random.default_rng(7))

        crossed = {idx for idx_a, idx_b, _ in crossings for idx in (idx_a, idx_b)}
        self.assertEqual(len(crossings), 2)
        self.assertNotIn(leftover, crossed)
        self.assertEqual(crossed | {leftover}, set(range(5)))
        self.assertEqual(individuals[leftover].genome.to_list(), before[leftover])
        self.assertEqual(individuals[leftover].fitness, 1.0)

    def test_crossover_population_length_one(self):
        """Test genomes of length 1 are never crossed."""
        individuals = [make_individual([0]), make_individual([1])]
        crossings = crossover_population(individuals, 1.0, self.rng)

        self.assertEqual(crossings, [])
        self.assertEqual(sorted(ind.genome.get(0) for ind in individuals), [0, 1])


if __name__ == '__main__':
    unittest.main()
