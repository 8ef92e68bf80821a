"""
NEAT Population Module

This module implements the Population class: the live genomes of the current
generation, their partition into species, and the step that turns one
generation into the next.

Classes:
    Population: The genomes of the current generation and their species
"""

import logging
import random
from typing import TYPE_CHECKING

from ffneat.genotype.network_chromosome import NetworkChromosome
from ffneat.genotype.network_generator  import NetworkGenerator
from ffneat.pool.species_manager        import SpeciesManager
if TYPE_CHECKING:
    from ffneat.operators import NeatCrossover, NeatMutation
    from ffneat.run.config import Config

logger = logging.getLogger(__name__)

class Population:
    """
    A population of evolving genomes in the NEAT algorithm.

    The size of the population is fixed at 'population_size' across generations.

    Public Attributes:
        genomes: List of all genomes in the current generation

    Public Properties:
        species_manager: Holds the current partition of the genomes into species

    Public Methods:
        get_fittest_genome():                         Return the genome with highest fitness
        speciate():                                   Partition the current genomes into species
        adjust_compatibility_threshold():             Steer the number of species
        spawn_next_generation(mutation, crossover):   Replace the genomes with the next generation
    """

    def __init__(self, config: 'Config', generator: NetworkGenerator):
        """
        Create the initial population: 'population_size' minimal genomes.

        Parameters:
            config:    stores configuration parameters
            generator: creates the minimal genomes of the initial population
        """
        self._config = config
        self.genomes: list[NetworkChromosome] = [generator.generate() for _ in range(config.population_size)]
        self._species_manager = SpeciesManager(config)

    @property
    def species_manager(self) -> SpeciesManager:
        return self._species_manager

    def get_fittest_genome(self) -> NetworkChromosome | None:
        """
        Find and return the genome with the highest fitness in the population.

        Returns:
            The genome with the highest fitness value, or None if the population is empty
        """
        if not self.genomes:
            return None
        return max(self.genomes, key=lambda g: g.fitness)

    def speciate(self) -> None:
        self._species_manager.speciate(self.genomes)

    def adjust_compatibility_threshold(self) -> float:
        return self._species_manager.adjust_compatibility_threshold()

    def spawn_next_generation(self, mutation: 'NeatMutation', crossover: 'NeatCrossover') -> None:
        """
        Create the next generation through selection and reproduction.
        Assumes the current genomes have been evaluated and speciated.

        Step 1: Offspring Allocation
        - Each species shares fitness among its members
        - Offspring are allocated proportionally to total adjusted fitness

        Step 2: Reproduction
        - Each species spawns its allocated number of offspring
        - The best member of each species is preserved unchanged (elitism)

        Step 3: Replenishment
        - If rounding left the new generation short of 'population_size', the
          remainder is filled with copies of randomly chosen current members
        """
        population_size = self._config.population_size
        allocations     = self._species_manager.calculate_offspring_allocations(population_size)

        offspring_all = []
        for spec_id, spec in self._species_manager.species.items():
            offspring_all.extend(spec.reproduce(allocations[spec_id], mutation, crossover))

        members = [m for spec in self._species_manager.species.values() for m in spec.members]
        if not members:
            members = self.genomes
        shortfall = population_size - len(offspring_all)
        if shortfall > 0:
            logger.debug("Filling %d slots with copies of current members", shortfall)
        while len(offspring_all) < population_size:
            offspring_all.append(random.choice(members).copy())

        self.genomes = offspring_all[:population_size]

    def __str__(self):
        return '\n'.join(str(genome) for genome in self.genomes)
