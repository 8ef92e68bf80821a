"""
Unit tests for ffneat.environments.xor module.
"""

import pytest

from ffneat.environments import Agent, XOREnvironment
from ffneat.genotype     import NetworkChromosome


class TableAgent(Agent):
    """Answers each XOR case from a lookup table."""

    def __init__(self, table):
        self.table   = table
        self.fitness = 0.0

    def output(self, inputs):
        return [self.table[tuple(int(x) for x in inputs)]]

    def get_fitness(self):
        return self.fitness

    def set_fitness(self, fitness):
        self.fitness = fitness


PERFECT = {(0, 0): 0.0, (0, 1): 1.0, (1, 0): 1.0, (1, 1): 0.0}


@pytest.fixture
def environment():
    return XOREnvironment()


class TestXOREnvironment:
    """Test the XOR task."""

    def test_sizes(self, environment):
        assert environment.state_size()  == 2
        assert environment.action_size() == 1

    def test_perfect_agent(self, environment):
        agent = TableAgent(PERFECT)
        assert environment.evaluate(agent) == pytest.approx(4.0)
        assert environment.solved(agent)

    def test_constant_agent(self, environment):
        agent = TableAgent(dict.fromkeys(PERFECT, 0.5))
        assert environment.evaluate(agent) == pytest.approx(3.0)
        assert not environment.solved(agent)

    def test_rounded_outputs_count_as_solution(self, environment):
        agent = TableAgent({(0, 0): 0.3, (0, 1): 0.7, (1, 0): 0.9, (1, 1): 0.1})
        assert environment.solved(agent)
        assert environment.evaluate(agent) == pytest.approx(4.0 - (0.09 + 0.09 + 0.01 + 0.01))

    def test_one_wrong_case_is_not_a_solution(self, environment):
        agent = TableAgent({**PERFECT, (1, 1): 1.0})
        assert not environment.solved(agent)
        assert environment.evaluate(agent) == pytest.approx(3.0)

    def test_evaluates_genomes(self, environment, minimal_genome_dict):
        genome  = NetworkChromosome.from_dict(minimal_genome_dict)
        fitness = environment.evaluate(genome)

        assert 0.0 < fitness < 4.0
        assert not environment.solved(genome)    # sigmoid(1 + 1 + 1) rounds to 1 for (1, 1)
