"""
NEAT Innovation Registry Module

This module implements the InnovationRegistry class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    InnovationRegistry: Per-run ledger of innovation numbers and neuron IDs
"""

import threading

class InnovationRegistry:
    """
    Tracks structural changes across all genomes of one evolutionary run.
    Ensures the same structural change gets the same innovation number (for
    connections) and the same ID (for neurons inserted by splitting a connection),
    no matter in which genome or generation it occurs. This convergence is what
    makes gene alignment during crossover meaningful.

    A registry lives exactly as long as one run: create a new one for each run,
    and hand the same instance to every operator taking part in it.

    Lookups are guarded by a lock, so operators mutating genomes concurrently
    cannot be handed the same new ID twice.

    Public Properties:
        number_innovations: How many distinct connections have been registered

    Public Methods:
        get_or_create(source_id, target_id): Innovation number of a connection
        get_split_neuron_id(innovation):     Neuron ID created by splitting a connection
        new_neuron_id():                     A neuron ID never handed out before
        reserve_neuron_ids(number):          Keep IDs below 'number' out of circulation
    """

    def __init__(self):
        self._next_innovation_number = 0
        self._next_neuron_id         = 0
        self._lock                   = threading.Lock()

        # For each connection ever created, map its endpoints to its innovation number
        self._innovation_numbers: dict[tuple[int, int], int] = {}   # (node_in, node_out) -> innovation number

        # For each connection ever split, the ID of the neuron that was inserted
        self._split_IDs: dict[int, int] = {}                       # innovation number -> neuron ID

    @property
    def number_innovations(self) -> int:
        return len(self._innovation_numbers)

    def get_or_create(self, source_id: int, target_id: int) -> int:
        """
        Get innovation number for a connection, identified by its endpoints.
        Returns existing innovation number if this connection was created
        before, otherwise assigns a new innovation number.

        Parameters:
            source_id: neuron ID for the 'from' end of the connection
            target_id: neuron ID for the 'to'   end of the connection

        Returns:
            connection ID (a.k.a. innovation number)
        """
        key = (source_id, target_id)
        with self._lock:
            if key not in self._innovation_numbers:
                self._innovation_numbers[key] = self._next_innovation_number
                self._next_innovation_number += 1
            return self._innovation_numbers[key]

    def get_split_neuron_id(self, innovation: int) -> int:
        """
        Get the ID of the hidden neuron inserted when splitting a connection.
        If this connection has been split before (in any genome) the same ID
        is returned, otherwise a new one is created and recorded.

        Parameters:
            innovation: innovation number of the connection being split
        """
        with self._lock:
            if innovation not in self._split_IDs:
                self._split_IDs[innovation] = self._take_neuron_id()
            return self._split_IDs[innovation]

    def new_neuron_id(self) -> int:
        """
        Return a neuron ID that has never been handed out.
        """
        with self._lock:
            return self._take_neuron_id()

    def reserve_neuron_ids(self, number: int) -> None:
        """
        Make sure IDs in [0, number) are never handed out for new neurons.
        Used for the fixed IDs of input, bias and output neurons.
        """
        with self._lock:
            self._next_neuron_id = max(self._next_neuron_id, number)

    def _take_neuron_id(self) -> int:
        neuron_id = self._next_neuron_id
        self._next_neuron_id += 1
        return neuron_id

    def __getstate__(self):
        state = self.__dict__.copy()
        del state['_lock']
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._lock = threading.Lock()

    def __repr__(self):
        return (f"InnovationRegistry(innovations={len(self._innovation_numbers)}, "
                f"splits={len(self._split_IDs)}, next_neuron_id={self._next_neuron_id})")
