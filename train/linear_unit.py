"""Single linear unit trained online with an error-correction rule.

The unit is an affine function `bias + sum(w_i * x_i)` with identity
activation. `fit` always restarts from freshly drawn random parameters and then
walks the examples in their given order, once per epoch, nudging every weight
by `learning_rate * error * x_i`. Training stops early the moment a single
example is predicted with an error of exactly zero.

Diagnostics are reported as events to an injectable sink instead of being
printed, so callers can log them, drive a progress bar or record them in tests.
"""

from __future__ import annotations
import enum
import logging
from typing import Callable, List, Sequence, Union
import numpy as np
from pydantic import BaseModel


logger = logging.getLogger(__name__)

DEFAULT_LEARNING_RATE = 0.01


class InvalidArgument(ValueError):
    """Raised when inputs do not match the unit's fixed dimension."""


class BiasUpdate(str, enum.Enum):
    """How often the bias receives the correction for one example.

    PER_FEATURE adds the correction inside the per-weight loop, i.e. N times
    per example. PER_EXAMPLE adds it exactly once.
    """

    PER_FEATURE = "per-feature"
    PER_EXAMPLE = "per-example"


class ErrorEvent(BaseModel):
    """Signed error of one example during one epoch."""

    epoch: int
    index: int
    error: float


class ConvergedEvent(BaseModel):
    """An example was predicted exactly; training stopped here."""

    epoch: int
    index: int


class FinishedEvent(BaseModel):
    """Final parameters at the end of a `fit` call."""

    weights: List[float]
    bias: float
    epochs: int
    converged: bool


TrainingEvent = Union[ErrorEvent, ConvergedEvent, FinishedEvent]
EventSink = Callable[[TrainingEvent], None]
RandomSource = Callable[[], float]


def log_event(event: TrainingEvent) -> None:
    """Default sink: route training events to the module logger."""

    if isinstance(event, ErrorEvent):
        logger.debug("error = %+f", event.error)

    elif isinstance(event, ConvergedEvent):
        logger.info("got zero error at iteration #%d", event.epoch)

    elif isinstance(event, FinishedEvent):
        logger.info(
            "finished training with the following weights %s (bias %s)",
            event.weights,
            event.bias,
        )


class LinearUnit:
    def __init__(
        self,
        weights: Sequence[float],
        bias: float = 0.0,
        *,
        learning_rate: float = DEFAULT_LEARNING_RATE,
        bias_update: BiasUpdate = BiasUpdate.PER_FEATURE,
        random_source: RandomSource | None = None,
        sink: EventSink | None = None,
    ) -> None:
        if len(weights) == 0:
            raise InvalidArgument("A linear unit needs at least one weight.")

        self.weights: List[float] = [float(w) for w in weights]
        self.bias = float(bias)
        self.learning_rate = float(learning_rate)
        self.bias_update = BiasUpdate(bias_update)
        self.random_source: RandomSource = (
            random_source
            if random_source is not None
            else np.random.default_rng().random
        )
        self.sink: EventSink = sink if sink is not None else log_event

    @classmethod
    def zeros(cls, dimension: int, **kwargs) -> "LinearUnit":
        return cls([0.0] * dimension, 0.0, **kwargs)

    @property
    def dimension(self) -> int:
        return len(self.weights)

    def _check_dimension(self, inputs: Sequence[float], what: str) -> None:
        if len(inputs) != self.dimension:
            raise InvalidArgument(
                f"{what} has {len(inputs)} values, expected {self.dimension}."
            )

    def activation(self, value: float) -> float:
        return value

    def net_input(self, inputs: Sequence[float]) -> float:
        return self.bias + sum(x * w for x, w in zip(inputs, self.weights))

    def predict(self, inputs: Sequence[float]) -> float:
        """Return `bias + dot(weights, inputs)` without touching the unit."""

        self._check_dimension(inputs, "Input vector")

        return self.activation(self.net_input(inputs))

    def reinitialize(self) -> None:
        """Draw a fresh bias and fresh weights from the random source."""

        self.bias = float(self.random_source())

        for i in range(self.dimension):
            self.weights[i] = float(self.random_source())

    def fit(
        self,
        examples: Sequence[Sequence[float]],
        targets: Sequence[float],
        max_iterations: int,
    ) -> None:
        """Train online over `examples` for at most `max_iterations` epochs.

        Any previous parameters are discarded first. Each example produces an
        `ErrorEvent`; an exact zero error produces a `ConvergedEvent` and ends
        training immediately. A `FinishedEvent` is always emitted last.
        """

        if len(examples) != len(targets):
            raise InvalidArgument(
                f"Got {len(examples)} examples but {len(targets)} targets."
            )

        if max_iterations < 0:
            raise InvalidArgument("max_iterations must not be negative.")

        for idx, example in enumerate(examples):
            self._check_dimension(example, f"Example {idx}")

        self.reinitialize()

        per_feature = self.bias_update is BiasUpdate.PER_FEATURE
        converged = False
        epochs = 0

        for epoch in range(max_iterations):
            epochs = epoch + 1

            for idx, (example, target) in enumerate(zip(examples, targets)):
                prediction = self.activation(self.net_input(example))
                error = float(target) - prediction
                self.sink(ErrorEvent(epoch=epoch, index=idx, error=error))

                if error == 0.0:
                    self.sink(ConvergedEvent(epoch=epoch, index=idx))
                    converged = True

                    break

                correction = error * self.learning_rate

                for i, x in enumerate(example):
                    self.weights[i] += correction * x

                    if per_feature:
                        self.bias += correction

                if not per_feature:
                    self.bias += correction

            if converged:
                break

        self.sink(
            FinishedEvent(
                weights=list(self.weights),
                bias=self.bias,
                epochs=epochs,
                converged=converged,
            )
        )

    def __repr__(self) -> str:
        return f"LinearUnit(weights={self.weights!r}, bias={self.bias!r})"
