"""
NEAT Species Module

This module implements the Species class for the NEAT algorithm.
A species represents a cluster of genetically similar genomes
that compete primarily within their own niche.

Classes:
    Species: Represents a single species with members and fitness sharing
"""

import random
from typing import TYPE_CHECKING

from ffneat.genotype.network_chromosome import NetworkChromosome
if TYPE_CHECKING:
    from ffneat.operators import NeatCrossover, NeatMutation
    from ffneat.run.config import Config

class Species:
    """
    A species representing a cluster of genetically similar genomes in NEAT.

    In NEAT, the population is divided into species based on genetic similarity,
    allowing different evolutionary niches to develop independently. This protects
    innovative structures from being eliminated by competition with more mature
    solutions, as genomes only compete for resources within their own species.

    Each species has a representative genome, fixed at creation and used only
    for the compatibility test during speciation. Species are rebuilt from
    scratch every generation, so a species lives for exactly one generation.

    The species manages reproduction by:
    - Preserving its best member through elitism
    - Selecting parents by fitness-proportionate (roulette) selection
    - Generating offspring through crossover followed by mutation

    Public Attributes:
        id:             Unique species identifier
        representative: Genome used for distance calculations during speciation
        members:        The genomes that are part of this species

    Public Properties:
        total_adjusted_fitness: Sum of the members' adjusted (shared) fitness
        best_member:            Member with the highest raw fitness

    Public Methods:
        distance_to(genome):                               Compatibility distance to the representative
        is_compatible(genome, threshold):                  Whether a genome belongs to this species
        add_member(genome):                                Add a genome to the species
        adjust_fitness():                                  Compute the members' shared fitness
        random_member():                                   A member chosen uniformly at random
        select_parent():                                   A member chosen by roulette selection
        reproduce(num_offspring, mutation, crossover):     Produce the species' share of the next generation
    """

    def __init__(self, species_id: int, representative: NetworkChromosome, config: 'Config'):
        """
        Initialize a new species.

        Parameters:
            species_id:     unique species identifier
            representative: the genome that represents this species in the speciation process
            config:         stores configuration parameters
        """
        self._config = config

        self.id            : int                     = species_id
        self.representative: NetworkChromosome       = representative

        # For now we only have one member: the representative.
        self.members       : list[NetworkChromosome] = [representative]

    def distance_to(self, genome: NetworkChromosome) -> float:
        """
        Calculate the compatibility distance between this species and a given genome.
        Uses the species representative genome for comparison.
        """
        return self.representative.distance(genome,
                                            self._config.distance_excess_coeff,
                                            self._config.distance_disjoint_coeff,
                                            self._config.distance_weight_coeff)

    def is_compatible(self, genome: NetworkChromosome, threshold: float | None = None) -> bool:
        """
        Whether a genome is close enough to the representative to join this species.

        Parameters:
            genome:    the genome being tested
            threshold: the compatibility threshold (the configured initial threshold if None)
        """
        if threshold is None:
            threshold = self._config.compatibility_threshold
        return self.distance_to(genome) < threshold

    def add_member(self, genome: NetworkChromosome) -> None:
        self.members.append(genome)

    def adjust_fitness(self) -> None:
        """
        Explicit fitness sharing: each member's adjusted fitness is its raw fitness
        divided by the size of the species, so large species cannot dominate
        reproduction by headcount alone.
        """
        size = len(self.members)
        for member in self.members:
            member.adjusted_fitness = member.fitness / size

    @property
    def total_adjusted_fitness(self) -> float:
        return sum(m.adjusted_fitness for m in self.members if m.adjusted_fitness is not None)

    @property
    def best_member(self) -> NetworkChromosome | None:
        if not self.members:
            return None
        return max(self.members, key=lambda m: m.fitness)

    def random_member(self) -> NetworkChromosome:
        return random.choice(self.members)

    def select_parent(self) -> NetworkChromosome:
        """
        Fitness-proportionate (roulette wheel) selection over the members' current fitness.
        Falls back to a uniform choice if the total fitness is not positive.
        """
        total_fitness = sum(m.fitness for m in self.members)
        if total_fitness <= 0:
            return self.random_member()

        r = random.random() * total_fitness
        cumulative = 0.0
        for member in self.members:
            cumulative += member.fitness
            if r < cumulative:
                return member
        return self.members[-1]   # only reached through floating point rounding

    def reproduce(self,
                  num_offspring: int,
                  mutation     : 'NeatMutation',
                  crossover    : 'NeatCrossover') -> list[NetworkChromosome]:
        """
        Generate offspring for the next generation through elitism and reproduction.

        The best member is transferred to the next generation unchanged. The
        remaining slots are filled by crossing two parents chosen by roulette
        selection and mutating the result. A single-member species crosses its
        member with itself, which amounts to a mutated copy.

        Parameters:
            num_offspring: number of genomes this species should produce
            mutation:      the mutation operator of the run
            crossover:     the crossover operator of the run

        Returns:
            exactly 'num_offspring' new genomes (an empty list if 'num_offspring' <= 0)

        Raises:
            ValueError: if the species has no members
        """
        if not self.members:
            raise ValueError(f"Species {self.id} has no members and cannot reproduce")
        if num_offspring <= 0:
            return []

        offspring = [self.best_member.copy()]

        while len(offspring) < num_offspring:
            parent1 = self.select_parent()
            parent2 = self.select_parent()
            child   = crossover.apply(parent1, parent2)
            offspring.append(mutation.apply(child))

        return offspring

    def __repr__(self):
        return f"Species(id={self.id}, members={len(self.members)})"
