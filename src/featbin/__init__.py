from .coerce import AttributeType, coerce_numeric, infer_attribute_type, is_numeric_value
from .stats import (
    class_entropy,
    information_density,
    optimal_bin_count,
    shannon_entropy,
    value_entropy,
)
from .dataset import DataRow, Dataset, read_csv
from .context import (
    MAX_DEPTH,
    MIN_GAIN_THRESHOLD,
    NUM_BINS,
    NUMBER_OF_BINS,
    OPTIMAL_NUM_BINS,
    BinningConfig,
    DiscretizationContext,
    DiscretizationResult,
    RecursiveConfig,
)
from .exceptions import (
    AttributeNotDiscretizableError,
    DiscretizationError,
    InvalidArgumentError,
    StepExecutionError,
)
from .labels import assign_bin, bin_label, interval_labels
from .pipeline import Pipeline
from .steps import collect_numeric_values, compute_optimal_bin_count, set_parameters
from .drivers import (
    IterativeBinningStrategy,
    RecursiveSplitStrategy,
    iterative_step,
    recursive_step,
    run_iterative,
    run_recursive,
)
from .strategies import (
    EqualFrequencyStrategy,
    EqualWidthStrategy,
    InformationDensityStrategy,
    SupervisedInformationDensity,
    UnsupervisedInformationDensity,
)
from .discretize import (
    EqualFrequencyDiscretizer,
    EqualWidthDiscretizer,
    PipelineDiscretizer,
    SupervisedDensityDiscretizer,
    UnsupervisedDensityDiscretizer,
    equal_frequency_pipeline,
    equal_width_pipeline,
    make_pipeline,
    supervised_density_pipeline,
    unsupervised_density_pipeline,
)

__all__ = [
    # Coercion & statistics
    "AttributeType",
    "coerce_numeric",
    "infer_attribute_type",
    "is_numeric_value",
    "class_entropy",
    "information_density",
    "optimal_bin_count",
    "shannon_entropy",
    "value_entropy",
    # Data
    "DataRow",
    "Dataset",
    "read_csv",
    # Context & results
    "MAX_DEPTH",
    "MIN_GAIN_THRESHOLD",
    "NUM_BINS",
    "NUMBER_OF_BINS",
    "OPTIMAL_NUM_BINS",
    "BinningConfig",
    "DiscretizationContext",
    "DiscretizationResult",
    "RecursiveConfig",
    # Errors
    "AttributeNotDiscretizableError",
    "DiscretizationError",
    "InvalidArgumentError",
    "StepExecutionError",
    # Engine
    "Pipeline",
    "assign_bin",
    "bin_label",
    "interval_labels",
    "collect_numeric_values",
    "compute_optimal_bin_count",
    "set_parameters",
    # Drivers
    "IterativeBinningStrategy",
    "RecursiveSplitStrategy",
    "iterative_step",
    "recursive_step",
    "run_iterative",
    "run_recursive",
    # Strategies
    "EqualFrequencyStrategy",
    "EqualWidthStrategy",
    "InformationDensityStrategy",
    "SupervisedInformationDensity",
    "UnsupervisedInformationDensity",
    # Presets & frame adapters
    "EqualFrequencyDiscretizer",
    "EqualWidthDiscretizer",
    "PipelineDiscretizer",
    "SupervisedDensityDiscretizer",
    "UnsupervisedDensityDiscretizer",
    "equal_frequency_pipeline",
    "equal_width_pipeline",
    "make_pipeline",
    "supervised_density_pipeline",
    "unsupervised_density_pipeline",
]
