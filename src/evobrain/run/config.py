import configparser
import os
from evobrain.activations import activations

GENOTYPE_KINDS      = ('cgp', 'feedforward', 'lstm', 'lstm_lite')
MUTATION_STRATEGIES = ('probabilistic', 'fixed_count')
CROSSOVER_OPERATORS = ('uniform', 'blend')

class Config:

    @staticmethod
    def _parse_hidden_layers(raw_layers):
        """
        Parse hidden_layers from string to list.

        Parameters:
            raw_layers: Either a comma-separated list of layer widths, an empty string, or already a list

        Returns:
            List of hidden layer widths
        """
        # If already a list, return as-is
        if isinstance(raw_layers, (list, tuple)):
            layers = [int(width) for width in raw_layers]
        else:
            layers = [int(width.strip()) for width in raw_layers.split(',') if width.strip()]

        for width in layers:
            if width <= 0:
                raise ValueError(f"Invalid hidden layer width '{width}' in hidden_layers")
        return layers

    @staticmethod
    def _parse_choice(name, value, allowed):
        if value not in allowed:
            raise ValueError(f"Invalid {name} '{value}', allowed values: {', '.join(allowed)}")
        return value

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a default Config.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config holding default values
                         (meant for testing and manual attribute setting).
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.population_size = 100
            self.genotype        = 'cgp'
            self.seed            = None

            # Set defaults for selection
            self.elite_percentage      = 0.1
            self.elite_min_fitness     = 0.0
            self.elite_mutation_chance = 0.0

            # Set defaults for the graph-program encoding
            self.rows                       = 4
            self.columns                    = 16
            self.levels_back                = 4
            self.outputs_use_levels_back    = False
            self.mutation_strategy          = 'probabilistic'
            self.connection_mutation_chance = 0.05
            self.function_mutation_chance   = 0.05
            self.mutation_count             = 2

            # Set defaults for the weight-vector encodings
            self.hidden_layers       = [5]
            self.activation_function = 'tanh'
            self.crossover_operator  = 'uniform'
            self.mutation_std_dev    = 0.1
            self.weight_range        = 1.0

            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
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
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [POPULATION]

        # The number of genotypes in each generation.
        self.population_size = get_value('POPULATION', 'population_size', int)

        # The genotype encoding evolved by the population.
        # Allowed values:
        #   "cgp"         - graph-program (Cartesian genetic programming)
        #   "feedforward" - weight vectors, feed-forward hidden layers
        #   "lstm"        - weight vectors, LSTM hidden layers
        #   "lstm_lite"   - weight vectors, single-gate LSTM hidden layers
        self.genotype = get_value('POPULATION', 'genotype', str)

        # Seed for the random sources of the run.
        # Use "None" for a different (non reproducible) run every time.
        self.seed = get_value('POPULATION', 'seed', int, default=None)

        # [SELECTION]

        # The fraction of the ranked population carried over
        # unchanged (elites) into the next generation.
        self.elite_percentage = get_value('SELECTION', 'elite_percentage', float, default=0.1)

        # Genotypes whose fitness is below this value never qualify as
        # elites, whatever their rank. Use "-inf" to disable the check.
        self.elite_min_fitness = get_value('SELECTION', 'elite_min_fitness', float, default=0.0)

        # The probability that an elite is mutated after being copied.
        self.elite_mutation_chance = get_value('SELECTION', 'elite_mutation_chance', float, default=0.0)

        # [CGP]

        # The dimensions of the grid of function nodes.
        self.rows    = get_value('CGP', 'rows',    int, default=4)
        self.columns = get_value('CGP', 'columns', int, default=16)

        # How many columns back a node connection can reach.
        self.levels_back = get_value('CGP', 'levels_back', int, default=4)

        # Whether the output connections are also restricted by 'levels_back'.
        # If 'False', outputs can connect to any input or node.
        self.outputs_use_levels_back = get_value('CGP', 'outputs_use_levels_back', bool, default=False)

        # How genes are selected for mutation.
        # Allowed values:
        #   "probabilistic" - every gene mutates with a given probability
        #   "fixed_count"   - exactly 'mutation_count' mutation points per genotype
        self.mutation_strategy = get_value('CGP', 'mutation_strategy', str, default='probabilistic')

        # The probabilities of resampling a connection and a node function
        # (only applicable if 'mutation_strategy' is "probabilistic").
        self.connection_mutation_chance = get_value('CGP', 'connection_mutation_chance', float, default=0.05)
        self.function_mutation_chance   = get_value('CGP', 'function_mutation_chance',   float, default=0.05)

        # The number of mutation points
        # (only applicable if 'mutation_strategy' is "fixed_count").
        self.mutation_count = get_value('CGP', 'mutation_count', int, default=2)

        # [CNE]

        # The widths of the hidden layers (comma separated, may be empty).
        raw_layers = get_value('CNE', 'hidden_layers', str, default='5')
        self.hidden_layers = self._parse_hidden_layers(raw_layers or '')

        # Activation function used by the layers (see 'basic_activations.py').
        # Recurrent gates always use the logistic function.
        self.activation_function = get_value('CNE', 'activation_function', str, default='tanh')

        # How the weights of two parents are combined.
        # Allowed values:
        #   "uniform" - each weight is copied from one of the parents
        #   "blend"   - each weight is interpolated between the parents
        self.crossover_operator = get_value('CNE', 'crossover_operator', str, default='uniform')

        # The standard deviation of the zero-centered normal
        # distribution from which weight perturbations are drawn.
        self.mutation_std_dev = get_value('CNE', 'mutation_std_dev', float, default=0.1)

        # New weights are drawn uniformly from [-weight_range, weight_range].
        self.weight_range = get_value('CNE', 'weight_range', float, default=1.0)

    def __setattr__(self, name, value):
        """
        Override 'setattr' to validate enumerated options and to parse
        'hidden_layers', so that config.hidden_layers = "4, 4" works.
        """
        if name == 'hidden_layers':
            value = self._parse_hidden_layers(value)
        elif name == 'genotype':
            value = self._parse_choice(name, value, GENOTYPE_KINDS)
        elif name == 'mutation_strategy':
            value = self._parse_choice(name, value, MUTATION_STRATEGIES)
        elif name == 'crossover_operator':
            value = self._parse_choice(name, value, CROSSOVER_OPERATORS)
        elif name == 'activation_function':
            value = self._parse_choice(name, value, tuple(activations.keys()))
        super().__setattr__(name, value)
