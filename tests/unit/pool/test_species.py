"""
Unit tests for ffneat.pool.species module.

This module contains tests for the Species class, which represents
a cluster of genetically similar genomes in NEAT.
"""

from unittest.mock import Mock

import pytest

from ffneat.genotype  import InnovationRegistry, NetworkChromosome, NetworkGenerator
from ffneat.operators import NeatCrossover, NeatMutation
from ffneat.pool      import Species
from ffneat.run.config import Config


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def config():
    return Config()


@pytest.fixture
def registry():
    return InnovationRegistry()


@pytest.fixture
def generator(registry):
    return NetworkGenerator(registry, 2, 1)


@pytest.fixture
def operators(registry, config):
    return NeatMutation(registry, config), NeatCrossover(config)


def make_genome(generator, fitness):
    genome = generator.generate()
    genome.fitness = fitness
    return genome


@pytest.fixture
def species(generator, config):
    """A species of three genomes with fitness 1, 2 and 3."""
    spec = Species(1, make_genome(generator, 1.0), config)
    spec.add_member(make_genome(generator, 2.0))
    spec.add_member(make_genome(generator, 3.0))
    return spec


# ============================================================================
# Test Species initialization and membership
# ============================================================================

class TestSpeciesInit:
    """Test Species.__init__ and add_member."""

    def test_init_sets_basic_attributes(self, generator, config):
        representative = generator.generate()
        spec = Species(7, representative, config)

        assert spec.id == 7
        assert spec.representative is representative
        assert spec.members == [representative]

    def test_add_member(self, species, generator):
        genome = generator.generate()
        species.add_member(genome)
        assert species.members[-1] is genome
        assert len(species.members) == 4

    def test_representative_is_fixed(self, species):
        representative = species.representative
        species.add_member(species.members[2])
        assert species.representative is representative


# ============================================================================
# Test compatibility
# ============================================================================

class TestCompatibility:
    """Test Species.distance_to() and Species.is_compatible()."""

    def test_distance_to_representative_is_zero(self, species):
        assert species.distance_to(species.representative) == 0.0

    def test_distance_uses_configured_coefficients(self, generator, config):
        representative = generator.generate()
        other = generator.generate()
        config.distance_weight_coeff = 0.0

        assert Species(1, representative, config).distance_to(other) == 0.0

    def test_is_compatible_uses_threshold(self, generator, config):
        representative = generator.generate()
        genome = Mock(spec=NetworkChromosome)
        spec = Species(1, representative, config)
        representative_distance = Mock(return_value=1.0)
        representative.distance = representative_distance

        assert spec.is_compatible(genome, threshold=1.5)
        assert not spec.is_compatible(genome, threshold=1.0)    # strictly below
        assert not spec.is_compatible(genome, threshold=0.5)

    def test_is_compatible_defaults_to_configured_threshold(self, generator, config):
        representative = generator.generate()
        representative.distance = Mock(return_value=2.9)
        spec = Species(1, representative, config)

        assert spec.is_compatible(Mock(spec=NetworkChromosome))
        config.compatibility_threshold = 2.0
        assert not spec.is_compatible(Mock(spec=NetworkChromosome))


# ============================================================================
# Test fitness sharing and selection
# ============================================================================

class TestFitness:
    """Test adjust_fitness(), total_adjusted_fitness, best_member and select_parent()."""

    def test_adjust_fitness_divides_by_size(self, species):
        species.adjust_fitness()

        assert [m.adjusted_fitness for m in species.members] == pytest.approx([1/3, 2/3, 1.0])
        assert species.total_adjusted_fitness == pytest.approx(2.0)

    def test_best_member(self, species):
        assert species.best_member.fitness == 3.0

    def test_best_member_of_empty_species(self, species):
        species.members = []
        assert species.best_member is None

    def test_random_member_is_member(self, species):
        for _ in range(10):
            assert species.random_member() in species.members

    def test_select_parent_is_fitness_proportionate(self, species):
        counts = {1.0: 0, 2.0: 0, 3.0: 0}
        for _ in range(3000):
            counts[species.select_parent().fitness] += 1

        assert counts[1.0] < counts[2.0] < counts[3.0]
        assert counts[3.0] / 3000 == pytest.approx(0.5, abs=0.05)

    def test_select_parent_zero_fitness_falls_back_to_uniform(self, species):
        for member in species.members:
            member.fitness = 0.0

        selected = {id(species.select_parent()) for _ in range(200)}
        assert selected == {id(m) for m in species.members}

    def test_select_parent_negative_total_does_not_fail(self, species):
        for member in species.members:
            member.fitness = -1.0
        assert species.select_parent() in species.members


# ============================================================================
# Test reproduction
# ============================================================================

class TestReproduce:
    """Test Species.reproduce()."""

    @pytest.mark.parametrize("quota", [1, 2, 5, 17])
    def test_returns_exact_quota(self, species, operators, quota):
        mutation, crossover = operators
        offspring = species.reproduce(quota, mutation, crossover)

        assert len(offspring) == quota
        assert all(isinstance(child, NetworkChromosome) for child in offspring)

    def test_first_offspring_is_unmutated_elite(self, species, operators):
        mutation, crossover = operators
        best = species.best_member

        elite = species.reproduce(3, mutation, crossover)[0]
        assert elite is not best
        assert elite.conn_genes == best.conn_genes

    @pytest.mark.parametrize("quota", [0, -3])
    def test_non_positive_quota_gives_empty_list(self, species, operators, quota):
        mutation, crossover = operators
        assert species.reproduce(quota, mutation, crossover) == []

    def test_empty_species_raises(self, species, operators):
        mutation, crossover = operators
        species.members = []
        with pytest.raises(ValueError):
            species.reproduce(3, mutation, crossover)

    def test_single_member_species(self, generator, config, operators):
        mutation, crossover = operators
        spec = Species(1, make_genome(generator, 1.0), config)

        offspring = spec.reproduce(4, mutation, crossover)
        assert len(offspring) == 4
        assert all(child is not spec.members[0] for child in offspring)

    def test_members_unchanged(self, species, operators):
        mutation, crossover = operators
        before = [m.to_dict() for m in species.members]
        species.reproduce(10, mutation, crossover)
        assert [m.to_dict() for m in species.members] == before

    def test_uses_operators(self, species):
        mutation  = Mock()
        crossover = Mock()
        crossover.apply.return_value = "child"
        mutation.apply.return_value  = "mutated child"

        offspring = species.reproduce(3, mutation, crossover)

        assert offspring[1:] == ["mutated child", "mutated child"]
        assert crossover.apply.call_count == 2
        mutation.apply.assert_called_with("child")
