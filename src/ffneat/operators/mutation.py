"""
NEAT Mutation Module

This module implements the NeatMutation class, the mutation operator of the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    NeatMutation: Applies one randomly selected mutation to a genome
"""

import logging
import random
from typing import TYPE_CHECKING

from ffneat.activations                  import ActivationFunction
from ffneat.errors                       import EmptyGenomeCollection, StructuralExhaustion
from ffneat.genotype.connection_gene     import ConnectionGene
from ffneat.genotype.innovation_registry import InnovationRegistry
from ffneat.genotype.network_chromosome  import NetworkChromosome
from ffneat.genotype.neuron_gene         import NeuronGene, NeuronType
if TYPE_CHECKING:
    from ffneat.run.config import Config

logger = logging.getLogger(__name__)

class NeatMutation:
    """
    The NEAT mutation operator.

    Every call to 'apply()' selects exactly one of four mutations, with
    probability proportional to its configured weight:
      + perturb the weights of all connections
      + toggle the enabled flag of one connection
      + add a connection between two unconnected neurons
      + add a neuron by splitting an existing connection

    A mutation never changes the genome it is given: the result is always a new
    genome, with fitness reset to 0.0. A mutation that finds nothing to work on
    (a genome without connections, no room for a new connection) returns an
    unchanged copy.

    Structural mutations get their innovation numbers and neuron IDs from the
    InnovationRegistry of the run, so the same change made independently in
    two genomes results in the same genes.

    Public Methods:
        apply(genome):             Apply one randomly selected mutation
        perturb_weights(genome):   Add gaussian noise to every connection weight
        toggle_connection(genome): Flip the enabled flag of a random connection
        add_connection(genome):    Connect two previously unconnected neurons
        add_neuron(genome):        Split a random connection with a new hidden neuron
    """

    def __init__(self,
                 registry: InnovationRegistry,
                 config  : 'Config | None' = None,
                 rng     : random.Random | None = None):
        """
        Parameters:
            registry: the innovation registry of the current run
            config:   stores configuration parameters (defaults are used if None)
            rng:      random number source (the 'random' module if None)
        """
        self._registry = registry
        self._random   = rng if rng is not None else random

        self._weight_perturb_probability    = 0.8
        self._toggle_connection_probability = 0.05
        self._add_connection_probability    = 0.1
        self._add_neuron_probability        = 0.05
        self._weight_perturb_strength       = 0.5
        self._new_connection_weight_stdev   = 0.5
        self._add_connection_attempts       = 100
        self._hidden_activation             = ActivationFunction.SIGMOID
        if config is not None:
            self._weight_perturb_probability    = config.weight_perturb_probability
            self._toggle_connection_probability = config.toggle_connection_probability
            self._add_connection_probability    = config.add_connection_probability
            self._add_neuron_probability        = config.add_neuron_probability
            self._weight_perturb_strength       = config.weight_perturb_strength
            self._new_connection_weight_stdev   = config.new_connection_weight_stdev
            self._add_connection_attempts       = config.add_connection_attempts
            self._hidden_activation             = config.hidden_activation

    def apply(self, genome: NetworkChromosome) -> NetworkChromosome:
        """
        Apply exactly one mutation, selected at random according to the configured probabilities.

        Parameters:
            genome: the genome to mutate (left unchanged)

        Returns:
            the mutated genome
        """
        normalizer = self._weight_perturb_probability    + \
                     self._toggle_connection_probability + \
                     self._add_connection_probability    + \
                     self._add_neuron_probability
        if normalizer <= 0:
            logger.debug("All mutation probabilities are zero, copying genome")
            return self._rebuild(genome)

        r = self._random.random() * normalizer
        if r < self._weight_perturb_probability:
            return self.perturb_weights(genome)

        r -= self._weight_perturb_probability
        if r < self._toggle_connection_probability:
            return self.toggle_connection(genome)

        r -= self._toggle_connection_probability
        if r < self._add_connection_probability:
            return self.add_connection(genome)

        return self.add_neuron(genome)

    def perturb_weights(self, genome: NetworkChromosome) -> NetworkChromosome:
        """
        Add zero-centered gaussian noise (stdev 'weight_perturb_strength') to every connection weight.
        """
        try:
            self._pick_connection(genome)
        except EmptyGenomeCollection:
            logger.debug("No connections to perturb, copying genome")
            return self._rebuild(genome)

        connections = [conn.copy(weight=conn.weight + self._random.gauss(0.0, self._weight_perturb_strength))
                       for conn in genome.conn_genes.values()]
        return NetworkChromosome(genome.layers, connections)

    def toggle_connection(self, genome: NetworkChromosome) -> NetworkChromosome:
        """
        Flip the enabled flag of one connection, chosen uniformly at random.
        """
        try:
            target = self._pick_connection(genome)
        except EmptyGenomeCollection:
            logger.debug("No connections to toggle, copying genome")
            return self._rebuild(genome)

        connections = [conn.copy(enabled=not conn.enabled) if conn.innovation == target.innovation else conn.copy()
                       for conn in genome.conn_genes.values()]
        return NetworkChromosome(genome.layers, connections)

    def add_connection(self, genome: NetworkChromosome) -> NetworkChromosome:
        """
        Add a new (enabled) connection between two existing neurons.

        The two ends of the new connection are selected at random; however, we cannot add a connection:
         + starting at an OUTPUT neuron
         + ending   at an INPUT or BIAS neuron
         + from a neuron to itself
         + going backwards or sideways (the source layer must be lower than the target layer)
         + between two neurons already connected by a direct connection
        If no valid pair is found within 'add_connection_attempts' attempts, the genome is copied unchanged.
        """
        try:
            source_id, target_id = self._find_unconnected_pair(genome)
        except StructuralExhaustion as e:
            logger.debug("Cannot add connection: %s", e)
            return self._rebuild(genome)

        innovation = self._registry.get_or_create(source_id, target_id)
        weight     = self._random.gauss(0.0, self._new_connection_weight_stdev)

        connections = [conn.copy() for conn in genome.conn_genes.values()]
        connections.append(ConnectionGene(source_id, target_id, weight, innovation))
        return NetworkChromosome(genome.layers, connections)

    def add_neuron(self, genome: NetworkChromosome) -> NetworkChromosome:
        """
        Split an existing connection by adding a new hidden neuron.

        The connection to split is chosen uniformly at random and disabled (its
        weight is kept). The new neuron is placed in the layer halfway between the
        layers of the connection's endpoints, and wired in with two new connections:
            source     -> new neuron (weight = 1.0)
            new neuron -> target     (weight = weight of the split connection)
        so that the network initially computes (almost) the same function.
        """
        try:
            split_conn = self._pick_connection(genome)
        except EmptyGenomeCollection:
            logger.debug("No connections to split, copying genome")
            return self._rebuild(genome)

        source_layer = genome.layer_of(split_conn.node_in)
        target_layer = genome.layer_of(split_conn.node_out)
        new_layer    = (source_layer + target_layer) / 2
        if not source_layer < new_layer < target_layer:
            logger.debug("No room for a layer between %s and %s, copying genome", source_layer, target_layer)
            return self._rebuild(genome)

        # The same split made in another genome results in the same neuron. If this
        # genome already holds that neuron (the connection was split before and then
        # re-enabled), the new neuron gets a fresh ID instead.
        new_neuron_id = self._registry.get_split_neuron_id(split_conn.innovation)
        if new_neuron_id in genome.neurons:
            new_neuron_id = self._registry.new_neuron_id()
        new_neuron = NeuronGene(new_neuron_id, NeuronType.HIDDEN, self._hidden_activation)

        innov1 = self._registry.get_or_create(split_conn.node_in, new_neuron_id)
        innov2 = self._registry.get_or_create(new_neuron_id, split_conn.node_out)

        connections = [conn.copy(enabled=False) if conn.innovation == split_conn.innovation else conn.copy()
                       for conn in genome.conn_genes.values()]
        connections.append(ConnectionGene(split_conn.node_in, new_neuron_id, 1.0, innov1))
        connections.append(ConnectionGene(new_neuron_id, split_conn.node_out, split_conn.weight, innov2))

        layers = {layer: list(neurons) for layer, neurons in genome.layers.items()}
        layers.setdefault(new_layer, []).append(new_neuron)
        return NetworkChromosome(layers, connections)

    def _pick_connection(self, genome: NetworkChromosome) -> ConnectionGene:
        if not genome.conn_genes:
            raise EmptyGenomeCollection("Genome has no connection genes")
        return self._random.choice(genome.connections)

    def _find_unconnected_pair(self, genome: NetworkChromosome) -> tuple[int, int]:
        sources = [n.id for n in genome.neurons.values() if n.type != NeuronType.OUTPUT]
        targets = [n.id for n in genome.neurons.values() if n.type not in (NeuronType.INPUT, NeuronType.BIAS)]
        if not sources or not targets:
            raise StructuralExhaustion("Genome has no candidate source or target neurons")

        connected = {(conn.node_in, conn.node_out) for conn in genome.conn_genes.values()}
        for _ in range(self._add_connection_attempts):
            source_id = self._random.choice(sources)
            target_id = self._random.choice(targets)
            if source_id == target_id:
                continue
            if genome.layer_of(source_id) >= genome.layer_of(target_id):
                continue
            if (source_id, target_id) in connected:
                continue
            return source_id, target_id

        raise StructuralExhaustion(f"No valid neuron pair found in {self._add_connection_attempts} attempts")

    @staticmethod
    def _rebuild(genome: NetworkChromosome) -> NetworkChromosome:
        return NetworkChromosome(genome.layers, [conn.copy() for conn in genome.conn_genes.values()])
