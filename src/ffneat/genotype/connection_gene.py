"""
NEAT Connection Gene Module

This module implements the ConnectionGene class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    ConnectionGene: Gene encoding a weighted connection between neurons
"""

class ConnectionGene:
    """
    A gene describing a weighted connection between two neurons in a Neural Network.

    Each connection gene represents a directed edge in the network graph,
    connecting a source neuron to a target neuron with an associated weight.
    Neurons are referenced by ID, never by object, so connection genes can be
    copied between genomes without dragging neuron objects along.

    Connection genes are uniquely identified by their innovation number, which
    serves as a historical marker enabling gene alignment during crossover and
    speciation. The endpoints and the innovation number are fixed once the gene
    is created; 'weight' and 'enabled' can change, but the operators only change
    them on fresh copies (see 'copy()').

    Public Attributes:
        weight:  Weight of the connection
        enabled: Whether this connection is active in the network

    Public Properties:
        node_in:    ID of the source neuron
        node_out:   ID of the target neuron
        innovation: Global innovation number uniquely identifying this connection

    Public Methods:
        copy(**changes): Independent copy, optionally with a new weight and/or enabled flag
    """

    __slots__ = ('_node_in', '_node_out', '_innovation', 'weight', 'enabled')

    def __init__(self,
                 node_in   : int,
                 node_out  : int,
                 weight    : float,
                 innovation: int,
                 enabled   : bool = True):
        """
        Initialize a connection gene.

        Parameters:
            node_in:    ID of the source neuron
            node_out:   ID of the target neuron
            weight:     Weight of the connection
            innovation: Number uniquely and globally identifying this connection
            enabled:    Whether this connection is active in the network
        """
        self._node_in   : int   = node_in
        self._node_out  : int   = node_out
        self._innovation: int   = innovation
        self.weight     : float = float(weight)
        self.enabled    : bool  = bool(enabled)

    @property
    def node_in(self) -> int:
        return self._node_in

    @property
    def node_out(self) -> int:
        return self._node_out

    @property
    def innovation(self) -> int:
        return self._innovation

    def copy(self, weight: float | None = None, enabled: bool | None = None) -> 'ConnectionGene':
        """
        Create an independent copy of this gene.

        Parameters:
            weight:  if given, the weight of the copy
            enabled: if given, the enabled flag of the copy

        Returns:
            a new ConnectionGene with the same endpoints and innovation number
        """
        return ConnectionGene(self._node_in,
                              self._node_out,
                              self.weight  if weight  is None else weight,
                              self._innovation,
                              self.enabled if enabled is None else enabled)

    def __eq__(self, other):
        if not isinstance(other, ConnectionGene):
            return NotImplemented
        return (self._innovation == other._innovation and
                self._node_in    == other._node_in    and
                self._node_out   == other._node_out   and
                self.weight      == other.weight      and
                self.enabled     == other.enabled)

    __hash__ = None

    def __repr__(self):
        return (f"ConnectionGene(node_in={self._node_in:03d}, node_out={self._node_out:03d}, "
                f"weight={self.weight:+.6f}, enabled={self.enabled}, innovation={self._innovation:03d})")

    def __str__(self):
        s  = f"[{self._innovation:03d},{'E' if self.enabled else 'D'},"
        s += f"{self._node_in:02d}=>{self._node_out:02d},{self.weight:+.02f}]"
        return s
