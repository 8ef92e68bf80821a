"""
Unit tests for ffneat.genotype.network_chromosome module.

This module contains tests for the NetworkChromosome class: construction and
structural invariants, forward evaluation, compatibility distance, copying
and dictionary (de)serialization.
"""

import math

import pytest

from ffneat.activations import ActivationFunction
from ffneat.errors      import InconsistentGenome, InvalidInputSize
from ffneat.genotype    import ConnectionGene, NetworkChromosome, NeuronGene, NeuronType


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def minimal_genome(minimal_genome_dict):
    return NetworkChromosome.from_dict(minimal_genome_dict)


@pytest.fixture
def hidden_genome(hidden_genome_dict):
    return NetworkChromosome.from_dict(hidden_genome_dict)


def make_layers():
    return {0.0: [NeuronGene(0, NeuronType.INPUT), NeuronGene(1, NeuronType.BIAS)],
            1.0: [NeuronGene(2, NeuronType.OUTPUT)]}


# ============================================================================
# Test construction
# ============================================================================

class TestConstruction:
    """Test NetworkChromosome.__init__ and its invariant checks."""

    def test_minimal_genome_structure(self, minimal_genome):
        assert minimal_genome.number_neurons == 4
        assert minimal_genome.number_connections == 3
        assert [n.id for n in minimal_genome.input_neurons]  == [0, 1]
        assert [n.id for n in minimal_genome.bias_neurons]   == [2]
        assert [n.id for n in minimal_genome.output_neurons] == [3]
        assert minimal_genome.hidden_neurons == []

    def test_fitness_defaults(self, minimal_genome):
        genome = NetworkChromosome(make_layers(), [])
        assert genome.fitness == 0.0
        assert genome.adjusted_fitness is None

    def test_layer_of(self, hidden_genome):
        assert hidden_genome.layer_of(0) == 0.0
        assert hidden_genome.layer_of(4) == 0.5
        assert hidden_genome.layer_of(3) == 1.0

    def test_layer_of_unknown_neuron_raises(self, hidden_genome):
        with pytest.raises(InconsistentGenome):
            hidden_genome.layer_of(99)

    def test_dangling_connection_raises(self):
        with pytest.raises(InconsistentGenome, match="absent"):
            NetworkChromosome(make_layers(), [ConnectionGene(0, 42, 1.0, 0)])

    def test_backward_connection_raises(self):
        with pytest.raises(InconsistentGenome, match="feed-forward"):
            NetworkChromosome(make_layers(), [ConnectionGene(2, 0, 1.0, 0)])

    def test_same_layer_connection_raises(self):
        with pytest.raises(InconsistentGenome):
            NetworkChromosome(make_layers(), [ConnectionGene(0, 1, 1.0, 0)])

    def test_duplicate_innovation_raises(self):
        with pytest.raises(InconsistentGenome):
            NetworkChromosome(make_layers(), [ConnectionGene(0, 2, 1.0, 0), ConnectionGene(1, 2, 1.0, 0)])

    def test_duplicate_neuron_raises(self):
        layers = make_layers()
        layers[0.5] = [NeuronGene(0, NeuronType.HIDDEN)]
        with pytest.raises(InconsistentGenome):
            NetworkChromosome(layers, [])

    def test_layer_outside_unit_interval_raises(self):
        layers = make_layers()
        layers[1.5] = [NeuronGene(7, NeuronType.HIDDEN)]
        with pytest.raises(InconsistentGenome):
            NetworkChromosome(layers, [])

    def test_is_connected_includes_disabled(self, hidden_genome):
        assert hidden_genome.is_connected(0, 3)       # disabled
        assert hidden_genome.is_connected(0, 4)
        assert not hidden_genome.is_connected(4, 0)
        assert not hidden_genome.is_connected(1, 4)

    def test_number_connections_enabled(self, hidden_genome):
        assert hidden_genome.number_connections == 5
        assert hidden_genome.number_connections_enabled == 4


# ============================================================================
# Test forward evaluation
# ============================================================================

class TestEvaluate:
    """Test NetworkChromosome.evaluate()."""

    def test_sigmoid_of_two_scenario(self, minimal_genome):
        """Inputs [1, 0], all weights 1.0, bias 1.0: output = sigmoid(1 + 0 + 1)."""
        output = minimal_genome.evaluate([1.0, 0.0])

        assert len(output) == 1
        assert output[0] == pytest.approx(1.0 / (1.0 + math.exp(-2.0)))
        assert output[0] == pytest.approx(0.8808, abs=1e-4)

    def test_hidden_neuron_and_disabled_connection(self, hidden_genome):
        """h = x0; out = 2*x1 - 1 + 0.5*h (the disabled 0->3 connection is ignored)."""
        assert hidden_genome.evaluate([2.0, 1.0]) == pytest.approx([2.0])
        assert hidden_genome.evaluate([0.0, 0.0]) == pytest.approx([-1.0])

    def test_evaluation_is_deterministic(self, hidden_genome):
        results = {tuple(hidden_genome.evaluate([0.3, -0.7])) for _ in range(5)}
        assert len(results) == 1

    def test_neuron_without_inputs_yields_activation_of_zero(self):
        genome = NetworkChromosome({0.0: [NeuronGene(0, NeuronType.INPUT)],
                                    1.0: [NeuronGene(1, NeuronType.OUTPUT, ActivationFunction.SIGMOID)]}, [])
        assert genome.evaluate([5.0]) == pytest.approx([0.5])

    def test_output_is_evaluate(self, minimal_genome):
        assert minimal_genome.output([1.0, 0.0]) == minimal_genome.evaluate([1.0, 0.0])

    @pytest.mark.parametrize("inputs", [[], [1.0], [1.0, 2.0, 3.0]])
    def test_wrong_input_size_raises(self, minimal_genome, inputs):
        with pytest.raises(InvalidInputSize) as excinfo:
            minimal_genome.evaluate(inputs)

        assert excinfo.value.expected == 2
        assert excinfo.value.received == len(inputs)

    def test_invalid_input_size_is_value_error(self, minimal_genome):
        with pytest.raises(ValueError):
            minimal_genome.evaluate([1.0])

    def test_output_order_follows_declaration(self):
        layers = {0.0: [NeuronGene(0, NeuronType.INPUT)],
                  1.0: [NeuronGene(5, NeuronType.OUTPUT), NeuronGene(2, NeuronType.OUTPUT)]}
        conns  = [ConnectionGene(0, 5, 1.0, 0), ConnectionGene(0, 2, 3.0, 1)]
        assert NetworkChromosome(layers, conns).evaluate([1.0]) == pytest.approx([1.0, 3.0])


# ============================================================================
# Test distance
# ============================================================================

class TestDistance:
    """Test NetworkChromosome.distance()."""

    def test_distance_to_self_is_zero(self, hidden_genome):
        assert hidden_genome.distance(hidden_genome) == 0.0

    def test_distance_is_symmetric(self, minimal_genome, hidden_genome):
        assert minimal_genome.distance(hidden_genome) == pytest.approx(hidden_genome.distance(minimal_genome))

    def test_distance_value(self, minimal_genome, hidden_genome):
        """
        Matching innovations 0, 1, 2 with weight differences 0.5, 1.0, 2.0;
        excess innovations 3, 4; N = 5.
        """
        expected = 1.0 * 2 / 5 + 0.4 * (3.5 / 3)
        assert minimal_genome.distance(hidden_genome) == pytest.approx(expected)

    def test_disjoint_genes(self):
        layers = make_layers()
        a = NetworkChromosome(layers, [ConnectionGene(0, 2, 1.0, 0), ConnectionGene(1, 2, 1.0, 5)])
        b = NetworkChromosome(layers, [ConnectionGene(0, 2, 1.0, 1), ConnectionGene(1, 2, 1.0, 5)])

        # innovations 0 and 1 are disjoint, 5 matches with equal weights
        assert a.distance(b, excess_coeff=10.0, disjoint_coeff=1.0) == pytest.approx(2 / 2)

    def test_coefficients(self, minimal_genome, hidden_genome):
        d = minimal_genome.distance(hidden_genome, excess_coeff=0.0, disjoint_coeff=0.0, weight_coeff=1.0)
        assert d == pytest.approx(3.5 / 3)

    def test_two_empty_genomes(self):
        assert NetworkChromosome(make_layers(), []).distance(NetworkChromosome(make_layers(), [])) == 0.0

    def test_n_is_not_collapsed_for_small_genomes(self):
        """With one gene each, N = 1 is the raw size, not a floor applied to larger genomes."""
        layers = make_layers()
        a = NetworkChromosome(layers, [ConnectionGene(0, 2, 1.0, 0)])
        b = NetworkChromosome(layers, [ConnectionGene(1, 2, 1.0, 1)])
        assert a.distance(b) == pytest.approx(1.0 + 1.0)


# ============================================================================
# Test copy and dict I/O
# ============================================================================

class TestCopyAndSerialization:
    """Test copy(), to_dict() and from_dict()."""

    def test_copy_is_independent(self, hidden_genome):
        hidden_genome.fitness = 3.0
        clone = hidden_genome.copy()

        assert clone is not hidden_genome
        assert clone.fitness == 3.0
        assert clone.conn_genes == hidden_genome.conn_genes

        clone.conn_genes[1].weight = 100.0
        assert hidden_genome.conn_genes[1].weight == 2.0

    def test_to_dict_round_trip(self, hidden_genome_dict):
        genome = NetworkChromosome.from_dict(hidden_genome_dict)
        again  = NetworkChromosome.from_dict(genome.to_dict())

        assert again.conn_genes == genome.conn_genes
        assert again.layers     == genome.layers
        assert again.evaluate([0.2, 0.4]) == genome.evaluate([0.2, 0.4])

    def test_to_dict_format(self, minimal_genome):
        d = minimal_genome.to_dict()

        assert d["fitness"] == 0.0
        assert [layer["layer"] for layer in d["layers"]] == [0.0, 1.0]
        assert d["layers"][1]["neurons"] == [{"id": 3, "type": "output", "activation": "sigmoid"}]
        assert d["connections"][0] == {"from": 0, "to": 3, "weight": 1.0, "enabled": True, "innovation": 0}

    def test_from_dict_unknown_type_raises(self, minimal_genome_dict):
        minimal_genome_dict["layers"][0]["neurons"][0]["type"] = "sensor"
        with pytest.raises(KeyError):
            NetworkChromosome.from_dict(minimal_genome_dict)

    def test_from_dict_dangling_connection_raises(self, minimal_genome_dict):
        minimal_genome_dict["connections"][0]["to"] = 17
        with pytest.raises(InconsistentGenome):
            NetworkChromosome.from_dict(minimal_genome_dict)

    def test_show_aligned(self, minimal_genome, hidden_genome):
        text = NetworkChromosome.show_aligned(minimal_genome, hidden_genome)
        lines = text.splitlines()

        assert lines[0] == "Connections:"
        assert len(lines[1]) == len(lines[2])
