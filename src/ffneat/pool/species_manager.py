"""
NEAT Species Manager Module

This module implements the SpeciesManager class for the NEAT algorithm.
The manager partitions the population into species, steers the number of
species by adjusting the compatibility threshold, and decides how many
offspring each species contributes to the next generation.

Speciation in NEAT:
In traditional genetic algorithms, new structural innovations often have lower
initial fitness and are quickly eliminated. NEAT addresses this by organizing
the population into species - groups of genetically similar genomes that
compete primarily within their own niche. This allows novel structures time to
optimize before facing global competition.

Key Concepts:
- Species: A cluster of genetically similar genomes
- Representative: The genome used to define species membership
- Compatibility Threshold: Maximum genetic distance for same-species membership
- Explicit Fitness Sharing: Offspring allocation proportional to species fitness

Classes:
    SpeciesManager: Manages all species, handles speciation and offspring allocation
"""

import logging
import math
from itertools import count
from typing    import TYPE_CHECKING

from ffneat.genotype.network_chromosome import NetworkChromosome
from ffneat.pool.species                import Species
if TYPE_CHECKING:
    from ffneat.run.config import Config

logger = logging.getLogger(__name__)

class SpeciesManager:
    """
    Manages the collection of species and the speciation process across generations.

    Species are rebuilt from scratch every generation: each genome joins the
    first species (in creation order) whose representative is compatible with
    it, or founds a new species otherwise. Species IDs keep increasing across
    generations.

    The compatibility threshold is a simple proportional control loop: after
    each speciation it is lowered when there are too few species, raised when
    there are too many, and clamped to a configured range.

    Public Attributes:
        species:                 Dictionary mapping species IDs to Species instances (creation order)
        compatibility_threshold: The current compatibility threshold

    Public Methods:
        speciate(genomes):                               Partition genomes into species
        adjust_compatibility_threshold():                Steer the threshold toward the target species count
        calculate_offspring_allocations(population_size): Determine offspring count per species
    """

    def __init__(self, config: 'Config'):
        """
        Initialize the Species Manager.

        Parameters:
            config: Stores configuration parameters.
        """
        self.species                : dict[int, Species] = {}   # species ID => Species instance
        self.compatibility_threshold: float              = config.compatibility_threshold
        self._id_generator                               = count(1)  # generates species IDs
        self._config                                     = config

    def speciate(self, genomes: list[NetworkChromosome]) -> None:
        """
        Assign all genomes to species based on genetic similarity.

        Postconditions:
            - Every genome is assigned to exactly one species
            - Each species has at least one member
            - Species representatives are from the current genomes

        Parameters:
            genomes: the genomes of the current generation
        """
        self.species = {}
        for genome in genomes:
            for spec in self.species.values():
                if spec.is_compatible(genome, self.compatibility_threshold):
                    spec.add_member(genome)
                    break

            # No species is similar enough, assign to a new species,
            # with this genome as its species representative.
            else:
                spec_id = next(self._id_generator)
                self.species[spec_id] = Species(spec_id, genome, self._config)

    def adjust_compatibility_threshold(self) -> float:
        """
        Lower the threshold if there are fewer species than 'target_species_min',
        raise it if there are more than 'target_species_max'; the result is
        clamped to ['min_compatibility_threshold', 'max_compatibility_threshold'].

        Returns:
            the new compatibility threshold
        """
        number_species = len(self.species)
        threshold      = self.compatibility_threshold

        if number_species < self._config.target_species_min:
            threshold -= self._config.threshold_step
        elif number_species > self._config.target_species_max:
            threshold += self._config.threshold_step

        threshold = min(max(threshold, self._config.min_compatibility_threshold),
                        self._config.max_compatibility_threshold)

        if threshold != self.compatibility_threshold:
            logger.debug("%d species, compatibility threshold %.3f -> %.3f",
                         number_species, self.compatibility_threshold, threshold)
        self.compatibility_threshold = threshold
        return threshold

    def calculate_offspring_allocations(self, population_size: int) -> dict[int, int]:
        """
        Calculate how many offspring each species should produce.

        Every species first shares fitness among its members; then offspring are
        allocated in proportion to each species' total adjusted fitness, rounding
        down. When the total adjusted fitness is not positive, all species get an
        equal share. Species without members are dropped and get nothing.

        Parameters:
            population_size: the size of the next generation

        Returns:
            Dictionary mapping species_id to number of offspring to produce
        """
        for spec_id in [spec_id for spec_id, spec in self.species.items() if not spec.members]:
            logger.debug("Dropping empty species %d", spec_id)
            del self.species[spec_id]
        if not self.species:
            return {}

        for spec in self.species.values():
            spec.adjust_fitness()
        total_fitness = sum(spec.total_adjusted_fitness for spec in self.species.values())

        allocations = {}   # species ID => number of offspring
        for spec_id, spec in self.species.items():
            if total_fitness <= 0:
                share = 1 / len(self.species)
            else:
                share = spec.total_adjusted_fitness / total_fitness
            allocations[spec_id] = max(0, math.floor(share * population_size))

        return allocations
