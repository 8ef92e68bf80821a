import configparser
import os
from ffneat.activations import ActivationFunction

class Config:
    """
    Configuration parameters of a NEAT run.

    Without a configuration file every parameter takes its default value, and
    parameters can then be set by hand. With a configuration file (INI format),
    every value found in the file overrides the default; keys missing from the
    file keep their default.

    Example file:
        [POPULATION_INIT]
        population_size = 150

        [SPECIATION]
        compatibility_threshold = 3.0

        [TERMINATION]
        max_number_generations = 100
    """

    _ACTIVATION_PARAMETERS = ('output_activation', 'hidden_activation')

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config with default values.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a default Config for manual attribute setting.
        """

        # [POPULATION INIT]

        # The number of genomes in each generation.
        self.population_size = 150

        # The range of the uniform distribution used to
        # initialize the weights of the initial genomes.
        self.weight_init_min = -1.0
        self.weight_init_max =  1.0

        # [NODE]

        # Activation function of output neurons, and of the hidden neurons created by mutation.
        # Options: identity, sigmoid, tanh (see 'basic_activations.py').
        self.output_activation = ActivationFunction.SIGMOID
        self.hidden_activation = ActivationFunction.SIGMOID

        # [SPECIATION]

        # Genomes whose compatibility distance to a species representative
        # is less than this threshold belong to that species.
        # The threshold is adjusted every generation, staying within
        # [min_compatibility_threshold, max_compatibility_threshold].
        self.compatibility_threshold     = 3.0
        self.min_compatibility_threshold = 0.5
        self.max_compatibility_threshold = 5.0

        # The amount by which the threshold changes in one generation.
        self.threshold_step = 0.3

        # With fewer species than 'target_species_min' the threshold is lowered,
        # with more species than 'target_species_max' it is raised.
        self.target_species_min = 5
        self.target_species_max = 10

        # The coefficients of the excess genes, disjoint genes and
        # average weight difference terms of the compatibility distance.
        self.distance_excess_coeff   = 1.0
        self.distance_disjoint_coeff = 1.0
        self.distance_weight_coeff   = 0.4

        # [MUTATION]

        # Exactly one mutation operator is applied per mutation; these are the
        # (relative) probabilities of each operator being selected.
        self.weight_perturb_probability    = 0.8
        self.toggle_connection_probability = 0.05
        self.add_connection_probability    = 0.1
        self.add_neuron_probability        = 0.05

        # The standard deviation of the zero-centered normal distribution
        # from which a weight perturbation value is drawn.
        self.weight_perturb_strength = 0.5

        # The standard deviation of the zero-centered normal distribution
        # from which the weight of a new connection is drawn.
        self.new_connection_weight_stdev = 0.5

        # The number of attempts at finding a valid pair of neurons
        # for a new connection, before giving up.
        self.add_connection_attempts = 100

        # [CROSSOVER]

        # If the parents disagree on whether a matching gene is enabled,
        # the probability that the offspring's copy is disabled.
        self.disabled_gene_probability = 0.75

        # [TERMINATION]

        # The number of generations after which to stop the run.
        # The run stops sooner if the environment reports a solution.
        self.max_number_generations = 100

        if config_file is None:
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Helper function to safely parse values;
        # a missing section or key leaves the default in place
        def get_value(section, key, value_type):
            default = getattr(self, key)
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                return default

        self.population_size = get_value('POPULATION_INIT', 'population_size', int)
        self.weight_init_min = get_value('POPULATION_INIT', 'weight_init_min', float)
        self.weight_init_max = get_value('POPULATION_INIT', 'weight_init_max', float)

        self.output_activation = get_value('NODE', 'output_activation', str)
        self.hidden_activation = get_value('NODE', 'hidden_activation', str)

        self.compatibility_threshold     = get_value('SPECIATION', 'compatibility_threshold'    , float)
        self.min_compatibility_threshold = get_value('SPECIATION', 'min_compatibility_threshold', float)
        self.max_compatibility_threshold = get_value('SPECIATION', 'max_compatibility_threshold', float)
        self.threshold_step              = get_value('SPECIATION', 'threshold_step'             , float)
        self.target_species_min          = get_value('SPECIATION', 'target_species_min'         , int)
        self.target_species_max          = get_value('SPECIATION', 'target_species_max'         , int)
        self.distance_excess_coeff       = get_value('SPECIATION', 'distance_excess_coeff'      , float)
        self.distance_disjoint_coeff     = get_value('SPECIATION', 'distance_disjoint_coeff'    , float)
        self.distance_weight_coeff       = get_value('SPECIATION', 'distance_weight_coeff'      , float)

        self.weight_perturb_probability    = get_value('MUTATION', 'weight_perturb_probability'   , float)
        self.toggle_connection_probability = get_value('MUTATION', 'toggle_connection_probability', float)
        self.add_connection_probability    = get_value('MUTATION', 'add_connection_probability'   , float)
        self.add_neuron_probability        = get_value('MUTATION', 'add_neuron_probability'       , float)
        self.weight_perturb_strength       = get_value('MUTATION', 'weight_perturb_strength'      , float)
        self.new_connection_weight_stdev   = get_value('MUTATION', 'new_connection_weight_stdev'  , float)
        self.add_connection_attempts       = get_value('MUTATION', 'add_connection_attempts'      , int)

        self.disabled_gene_probability = get_value('CROSSOVER', 'disabled_gene_probability', float)

        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int)

        if self.min_compatibility_threshold > self.max_compatibility_threshold:
            raise ValueError("'min_compatibility_threshold' exceeds 'max_compatibility_threshold'")

    def __setattr__(self, name, value):
        """
        Override 'setattr' to automatically parse activation names when set.
        This allows users to write config.hidden_activation = "tanh" and have it
        automatically converted to ActivationFunction.TANH.
        """
        if name in self._ACTIVATION_PARAMETERS:
            value = ActivationFunction.parse(value if value is not None else "none")
        super().__setattr__(name, value)
