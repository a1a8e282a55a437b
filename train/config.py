from __future__ import annotations
import numpy as np
from pydantic import BaseModel, Field
from .linear_unit import (
    DEFAULT_LEARNING_RATE,
    BiasUpdate,
    EventSink,
    LinearUnit,
)


DEFAULT_MAX_ITERATIONS = 1100


class TrainingConfig(BaseModel):
    """Hyperparameters for training a progression unit."""

    learning_rate: float = Field(default=DEFAULT_LEARNING_RATE, gt=0.0)
    max_iterations: int = Field(default=DEFAULT_MAX_ITERATIONS, ge=0)
    seed: int | None = None
    bias_update: BiasUpdate = BiasUpdate.PER_FEATURE


def build_unit(
    config: TrainingConfig, dimension: int, sink: EventSink | None = None
) -> LinearUnit:
    """Create an all-zero unit whose initializer draws from a seeded generator."""

    rng = np.random.default_rng(config.seed)

    return LinearUnit.zeros(
        dimension,
        learning_rate=config.learning_rate,
        bias_update=config.bias_update,
        random_source=rng.random,
        sink=sink,
    )
