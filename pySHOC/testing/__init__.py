from .baseline import (
    BaselineAction,
    BaselineMismatch,
    CompareBaseline,
    GenerateBaseline,
    NoBaseline,
    make_baseline_strategy,
    read_baseline,
    write_baseline,
)
from .random_data import DEFAULT_RANDOM_RANGES, randomize
