"""
NEAT Network Chromosome Module

This module implements the NetworkChromosome class, the genome of the NEAT
(NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    NetworkChromosome: Complete genome describing a feed-forward neural network
"""

from typing import Iterable

from ffneat.activations                import ActivationFunction
from ffneat.environments.base          import Agent
from ffneat.errors                     import InconsistentGenome, InvalidInputSize
from ffneat.genotype.connection_gene   import ConnectionGene
from ffneat.genotype.neuron_gene       import NeuronGene, NeuronType

class NetworkChromosome(Agent):
    """
    A NEAT genome representing a feed-forward neural network.

    The genome consists of:
    - Neuron genes, grouped by layer coordinate. A layer coordinate is a real
      number in [0, 1]: input and bias neurons live at 0.0, output neurons at
      1.0, and hidden neurons at fractional coordinates strictly between the
      coordinates of the two neurons whose connection they split.
    - Connection genes, keyed by innovation number. Connections reference
      neurons by ID only.

    Every connection goes from a lower to a higher layer coordinate, which makes
    the network acyclic and lets a single pass over the layers, in ascending
    order, evaluate it. Both invariants (endpoints resolve to neurons of the
    genome; connections are feed-forward) are checked on construction.

    The structure of a genome never changes after construction: the mutation
    and crossover operators always build new genomes. Only the fitness (and
    the species-adjusted fitness) is written to an existing genome.

    Public Attributes:
        fitness:          Raw fitness, assigned by the evaluation step (0.0 until then)
        adjusted_fitness: Fitness shared within the genome's species (None until calculated)

    Public Properties:
        layers:                     Layer coordinate => list of neuron genes (declaration order)
        conn_genes:                 Innovation number => connection gene
        neurons:                    Neuron ID => neuron gene
        connections:                List of all connection genes
        input_neurons:              Input neurons, in declaration order
        output_neurons:             Output neurons, in declaration order
        hidden_neurons:             Hidden neurons
        bias_neurons:               Bias neurons
        number_neurons:             Total number of neurons
        number_connections:         Total number of connections
        number_connections_enabled: Number of enabled connections

    Public Methods:
        layer_of(neuron_id):  Layer coordinate of a neuron
        is_connected(a, b):   Whether a direct connection a->b exists (enabled or not)
        evaluate(inputs):     Forward pass through the network
        output(inputs):       Same as 'evaluate' (Agent interface)
        distance(other, ...): Compatibility distance to another genome
        copy():               Independent copy of the genome
        to_dict():            Convert the genome to a dictionary

    Class Methods:
        from_dict(genome_dict): Create a genome from a dictionary description
    """

    INPUT_LAYER  = 0.0
    OUTPUT_LAYER = 1.0

    def __init__(self,
                 layers     : dict[float, list[NeuronGene]],
                 connections: Iterable[ConnectionGene],
                 fitness    : float = 0.0):
        """
        Parameters:
            layers:      layer coordinate => neuron genes placed at that coordinate
            connections: the connection genes of the network
            fitness:     initial fitness

        Raises:
            InconsistentGenome: if the genome violates a structural invariant
        """
        self._layers  : dict[float, list[NeuronGene]] = {float(k): list(v) for k, v in layers.items()}
        self.conn_genes: dict[int, ConnectionGene]     = {}   # innovation number => connection gene

        self.fitness         : float        = fitness
        self.adjusted_fitness: float | None = None

        # Index neurons by ID
        self._neurons : dict[int, NeuronGene] = {}    # neuron ID => neuron gene
        self._layer_of: dict[int, float]      = {}    # neuron ID => layer coordinate
        for layer in sorted(self._layers):
            if not self.INPUT_LAYER <= layer <= self.OUTPUT_LAYER:
                raise InconsistentGenome(f"Layer coordinate {layer} outside [0, 1]")
            for neuron in self._layers[layer]:
                if neuron.id in self._neurons:
                    raise InconsistentGenome(f"Neuron {neuron.id} appears more than once")
                self._neurons [neuron.id] = neuron
                self._layer_of[neuron.id] = layer
        self._sorted_layers: list[float] = sorted(self._layers)

        for conn in connections:
            if conn.innovation in self.conn_genes:
                raise InconsistentGenome(f"Duplicate innovation number {conn.innovation}")
            self._check_connection(conn)
            self.conn_genes[conn.innovation] = conn

    def _check_connection(self, conn: ConnectionGene) -> None:
        for neuron_id in (conn.node_in, conn.node_out):
            if neuron_id not in self._layer_of:
                raise InconsistentGenome(
                    f"Connection {conn.innovation} references neuron {neuron_id}, absent from every layer")
        if self._layer_of[conn.node_in] >= self._layer_of[conn.node_out]:
            raise InconsistentGenome(f"Connection {conn.innovation} is not feed-forward "
                                     f"({self._layer_of[conn.node_in]} -> {self._layer_of[conn.node_out]})")

    @property
    def layers(self) -> dict[float, list[NeuronGene]]:
        return self._layers

    @property
    def neurons(self) -> dict[int, NeuronGene]:
        return self._neurons

    @property
    def connections(self) -> list[ConnectionGene]:
        return list(self.conn_genes.values())

    def _neurons_of_type(self, neuron_type: NeuronType) -> list[NeuronGene]:
        return [neuron for layer in self._sorted_layers
                       for neuron in self._layers[layer] if neuron.type == neuron_type]

    @property
    def input_neurons(self) -> list[NeuronGene]:
        return self._neurons_of_type(NeuronType.INPUT)

    @property
    def output_neurons(self) -> list[NeuronGene]:
        return self._neurons_of_type(NeuronType.OUTPUT)

    @property
    def hidden_neurons(self) -> list[NeuronGene]:
        return self._neurons_of_type(NeuronType.HIDDEN)

    @property
    def bias_neurons(self) -> list[NeuronGene]:
        return self._neurons_of_type(NeuronType.BIAS)

    @property
    def number_neurons(self) -> int:
        return len(self._neurons)

    @property
    def number_connections(self) -> int:
        return len(self.conn_genes)

    @property
    def number_connections_enabled(self) -> int:
        return sum(1 for conn in self.conn_genes.values() if conn.enabled)

    def layer_of(self, neuron_id: int) -> float:
        """
        Return the layer coordinate of a neuron.

        Raises:
            InconsistentGenome: if the neuron is not part of this genome
        """
        try:
            return self._layer_of[neuron_id]
        except KeyError:
            raise InconsistentGenome(f"Neuron {neuron_id} is absent from every layer") from None

    def is_connected(self, source_id: int, target_id: int) -> bool:
        """
        Whether a direct connection 'source_id' -> 'target_id' exists (enabled or disabled).
        """
        return any(c.node_in == source_id and c.node_out == target_id for c in self.conn_genes.values())

    def evaluate(self, inputs: list[float]) -> list[float]:
        """
        Perform a complete forward pass through the network.

        Input neurons take their values from 'inputs' in declaration order and
        bias neurons output 1.0. Layers are then visited in ascending order; every
        other neuron applies its activation to the weighted sum of its enabled
        incoming connections (a neuron without any yields activation(0)).

        Parameters:
            inputs: the network inputs (as many as input neurons)

        Returns:
            the values of the output neurons, in declaration order

        Raises:
            InvalidInputSize: if the number of inputs does not match the number of input neurons
        """
        input_neurons = self.input_neurons
        if len(inputs) != len(input_neurons):
            raise InvalidInputSize(len(input_neurons), len(inputs))

        # For each neuron, the enabled connections ending in it
        incoming: dict[int, list[ConnectionGene]] = {}
        for conn in self.conn_genes.values():
            if conn.enabled:
                incoming.setdefault(conn.node_out, []).append(conn)

        values: dict[int, float] = {}
        for neuron, value in zip(input_neurons, inputs):
            values[neuron.id] = float(value)

        for layer in self._sorted_layers:
            for neuron in self._layers[layer]:
                if neuron.type == NeuronType.INPUT:
                    continue
                weighted_input = sum(values[c.node_in] * c.weight for c in incoming.get(neuron.id, ()))
                values[neuron.id] = neuron.activate(weighted_input)

        return [values[neuron.id] for neuron in self.output_neurons]

    def output(self, inputs: list[float]) -> list[float]:
        return self.evaluate(inputs)

    def get_fitness(self) -> float:
        return self.fitness

    def set_fitness(self, fitness: float) -> None:
        self.fitness = fitness

    def distance(self,
                 other         : 'NetworkChromosome',
                 excess_coeff  : float = 1.0,
                 disjoint_coeff: float = 1.0,
                 weight_coeff  : float = 0.4) -> float:
        """
        Calculate the compatibility distance between this genome and another,
        using the original NEAT formula:
           distance = (c1 * E / N) + (c2 * D / N) + c3 * W̄

        Where:
        - E = number of excess connection genes
        - D = number of disjoint connection genes
        - N = number of connection genes in larger genome (not collapsed to 1 for small genomes)
        - W̄ = average weight difference of matching connection genes
        - c1, c2, c3 = weight of the three terms

        Genes are aligned by innovation number only.

        Parameters:
            other:          the genome relative to which we are calculating the distance
            excess_coeff:   c1
            disjoint_coeff: c2
            weight_coeff:   c3

        Returns:
            the compatibility distance between this genome and 'other'
        """
        innovs1 = set(self.conn_genes.keys())
        innovs2 = set(other.conn_genes.keys())
        if not innovs1 and not innovs2:
            return 0.0

        matching_innovs     =  innovs1 & innovs2
        non_matching_innovs = (innovs1 | innovs2) - matching_innovs

        max_innov1 = max(innovs1) if innovs1 else -1
        max_innov2 = max(innovs2) if innovs2 else -1

        # Excess   genes: beyond the other genome's max innovation number
        # Disjoint genes: within the overlapping range but not matching
        num_excess   = 0
        num_disjoint = 0
        for innov in non_matching_innovs:
            if innov > min(max_innov1, max_innov2):
                num_excess += 1
            else:
                num_disjoint += 1

        avg_weight_diff = 0.0
        if matching_innovs:
            weight_diff = sum(abs(self.conn_genes[i].weight - other.conn_genes[i].weight) for i in matching_innovs)
            avg_weight_diff = weight_diff / len(matching_innovs)

        N = max(len(self.conn_genes), len(other.conn_genes))
        return (excess_coeff   * num_excess   / N +
                disjoint_coeff * num_disjoint / N +
                weight_coeff   * avg_weight_diff)

    def copy(self) -> 'NetworkChromosome':
        """
        Create an independent copy of this genome, fitness included.
        Neuron genes are immutable and shared; connection genes are copied.
        """
        clone = NetworkChromosome(self._layers,
                                  [conn.copy() for conn in self.conn_genes.values()],
                                  self.fitness)
        clone.adjusted_fitness = self.adjusted_fitness
        return clone

    def to_dict(self) -> dict:
        """
        Convert the genome to a dictionary representation.

        This is the inverse operation of from_dict(), producing
        a dictionary that can be used to reconstruct the genome.

        Returns:
            Dictionary with the following structure:
            {
                "fitness": 3.2,
                "layers": [
                    {"layer": 0.0, "neurons": [{"id": 0, "type": "input", "activation": "identity"}, ...]},
                    {"layer": 0.5, "neurons": [{"id": 4, "type": "hidden", "activation": "sigmoid"}]},
                    {"layer": 1.0, "neurons": [{"id": 3, "type": "output", "activation": "sigmoid"}]}
                ],
                "connections": [
                    {"from": 0, "to": 4, "weight": 1.0, "enabled": true, "innovation": 5},
                    ...
                ]
            }
        """
        layers = []
        for layer in self._sorted_layers:
            neurons = [{"id"        : neuron.id,
                        "type"      : neuron.type.name.lower(),
                        "activation": neuron.activation.value} for neuron in self._layers[layer]]
            layers.append({"layer": layer, "neurons": neurons})

        connections = []
        for conn in sorted(self.conn_genes.values(), key=lambda c: c.innovation):
            connections.append({
                "from"      : conn.node_in,
                "to"        : conn.node_out,
                "weight"    : conn.weight,
                "enabled"   : conn.enabled,
                "innovation": conn.innovation
            })

        return {
            "fitness"    : self.fitness,
            "layers"     : layers,
            "connections": connections
        }

    @classmethod
    def from_dict(cls, genome_dict: dict) -> 'NetworkChromosome':
        """
        Create a genome from a dictionary description (see 'to_dict()' for the format).
        The "activation" of a neuron defaults to identity, "enabled" to true
        and "fitness" to 0.0.

        Raises:
            InconsistentGenome: if the described structure violates a genome invariant
            KeyError:           if required fields are missing
            ValueError:         if a neuron type or activation name is unknown
        """
        layers = {}
        for layer_data in genome_dict["layers"]:
            neurons = []
            for neuron_data in layer_data["neurons"]:
                neuron_type = NeuronType[neuron_data["type"].upper()]
                activation  = ActivationFunction.parse(neuron_data.get("activation", "identity"))
                neurons.append(NeuronGene(neuron_data["id"], neuron_type, activation))
            layers[float(layer_data["layer"])] = neurons

        connections = [ConnectionGene(conn_data["from"],
                                      conn_data["to"],
                                      conn_data["weight"],
                                      conn_data["innovation"],
                                      conn_data.get("enabled", True))
                       for conn_data in genome_dict.get("connections", [])]

        return cls(layers, connections, genome_dict.get("fitness", 0.0))

    def __str__(self):
        neuron_genes_str = ''.join(str(self._neurons[nid]) for nid in sorted(self._neurons))
        conn_genes_str   = ''.join(str(conn) for conn in self.conn_genes.values())
        return f"Fitness: {self.fitness:.4f}\nNeurons: {neuron_genes_str}\nConns: {conn_genes_str}"

    def __repr__(self):
        return (f"NetworkChromosome(neurons={self.number_neurons}, "
                f"connections={self.number_connections}, fitness={self.fitness})")

    @staticmethod
    def show_aligned(genome1: 'NetworkChromosome', genome2: 'NetworkChromosome') -> str:
        """
        Return two genomes as text, with their connection genes aligned by innovation number.
        """
        innovs_all = sorted(set(genome1.conn_genes.keys()) | set(genome2.conn_genes.keys()))
        conn_str1 = ""
        conn_str2 = ""
        for innov in innovs_all:
            gene_str1 = str(genome1.conn_genes[innov]) if innov in genome1.conn_genes else ""
            gene_str2 = str(genome2.conn_genes[innov]) if innov in genome2.conn_genes else ""
            width = max(len(gene_str1), len(gene_str2))
            conn_str1 += gene_str1.ljust(width)
            conn_str2 += gene_str2.ljust(width)
        return f"Connections:\n{conn_str1}\n{conn_str2}\n"
