"""
NEAT Crossover Module

This module implements the NeatCrossover class, the crossover operator of the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    NeatCrossover: Merges two parent genomes, aligning genes by innovation number
"""

import logging
import random
from typing import TYPE_CHECKING

from ffneat.errors                      import InconsistentGenome
from ffneat.genotype.connection_gene    import ConnectionGene
from ffneat.genotype.network_chromosome import NetworkChromosome
from ffneat.genotype.neuron_gene        import NeuronGene, NeuronType
if TYPE_CHECKING:
    from ffneat.run.config import Config

logger = logging.getLogger(__name__)

class NeatCrossover:
    """
    The NEAT crossover operator.

    NEAT crossover rules:
    - Matching genes: randomly inherit from either parent
    - Disjoint/excess genes: inherit from fitter parent only

    The offspring's neurons are the union of both parents' neurons; a neuron
    present in both parents is taken (with its layer) from parent1.

    Public Methods:
        apply(parent1, parent2): Create an offspring from two parents
    """

    def __init__(self, config: 'Config | None' = None, rng: random.Random | None = None):
        """
        Parameters:
            config: stores configuration parameters (defaults are used if None)
            rng:    random number source (the 'random' module if None)
        """
        self._random = rng if rng is not None else random

        self._disabled_gene_probability = 0.75
        if config is not None:
            self._disabled_gene_probability = config.disabled_gene_probability

    def apply(self, parent1: NetworkChromosome, parent2: NetworkChromosome) -> NetworkChromosome:
        """
        Perform NEAT crossover between two genomes.

        Parameters:
            parent1: the first  parent genome (preferred on ties and for neuron genes)
            parent2: the second parent genome

        Returns:
            New offspring genome, with fitness 0.0

        Raises:
            InconsistentGenome: if an inherited connection references a neuron absent from both parents
        """
        fitter_parent = parent1 if parent1.fitness >= parent2.fitness else parent2

        # Start by deciding which connections are part of the new network.
        # Once this is decided, the ends of these connections must be found
        # among the neurons of the two parents.

        innovs1 = set(parent1.conn_genes.keys())
        innovs2 = set(parent2.conn_genes.keys())

        matching_innovs = innovs1 & innovs2                               # conn genes shared by both genomes
        extra_innovs    = (innovs1 if fitter_parent is parent1 else innovs2) - matching_innovs

        connections: list[ConnectionGene] = []
        for innov in sorted(matching_innovs | extra_innovs):
            if innov not in matching_innovs:
                connections.append(fitter_parent.conn_genes[innov].copy())
                continue

            # Matching connections: inherit connection gene randomly from either parent
            conn1 = parent1.conn_genes[innov]
            conn2 = parent2.conn_genes[innov]
            conn_gene = (conn1 if self._random.random() < 0.5 else conn2).copy()

            # Handle 'enabled' status:
            # - if parents disagree, disabled with probability 'disabled_gene_probability'
            # - if parents agree, inherit that status
            if conn1.enabled != conn2.enabled:
                conn_gene.enabled = self._random.random() >= self._disabled_gene_probability

            connections.append(conn_gene)

        layers = self._merge_layers(parent1, parent2)

        neuron_ids = {neuron.id for neurons in layers.values() for neuron in neurons}
        for conn in connections:
            for neuron_id in (conn.node_in, conn.node_out):
                if neuron_id not in neuron_ids:
                    raise InconsistentGenome(f"Neuron ID {neuron_id} cannot be found in either parent")

        return NetworkChromosome(layers, connections)

    @staticmethod
    def _merge_layers(parent1: NetworkChromosome, parent2: NetworkChromosome) -> dict[float, list[NeuronGene]]:
        """
        Union of the parents' neurons by ID, parent1's copy and layer first.
        A bias neuron is synthesized in the input layer if neither parent has one.
        """
        layers: dict[float, list[NeuronGene]] = {}
        seen   : set[int]                     = set()
        for parent in (parent1, parent2):
            for layer in sorted(parent.layers):
                for neuron in parent.layers[layer]:
                    if neuron.id in seen:
                        continue
                    seen.add(neuron.id)
                    layers.setdefault(layer, []).append(neuron)

        all_neurons = [neuron for neurons in layers.values() for neuron in neurons]
        has_inputs  = any(neuron.type == NeuronType.INPUT for neuron in all_neurons)
        has_bias    = any(neuron.type == NeuronType.BIAS  for neuron in all_neurons)
        if has_inputs and not has_bias:
            # Same ID a generated genome would give its bias neuron, unless already taken
            bias_id = sum(1 for neuron in all_neurons if neuron.type == NeuronType.INPUT)
            if bias_id in seen:
                bias_id = max(seen) + 1
            logger.debug("Synthesizing bias neuron %d in offspring", bias_id)
            layers.setdefault(NetworkChromosome.INPUT_LAYER, []).append(NeuronGene(bias_id, NeuronType.BIAS))

        return layers
