"""
Step-sampling policy shared by contour and solution batches.
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Tuple

from .schemas import SamplingOptions

# Consumer signature: (sample_ordinal, step_index, effective_options) -> None
StepConsumer = Callable[[int, int, SamplingOptions], None]


class StepIterator:
    """
    Evenly spaced step indices: offset + i*stride for i in range(sample_count).

    When the stride is below 1 (more samples than steps) there are no
    samples at all rather than repeated indices.

    Iterating yields (ordinal, step, options) tuples; calling the iterator
    with a consumer invokes it once per sample with the same arguments.
    """

    def __init__(self, options: SamplingOptions):
        """
        Initialize StepIterator.

        Args:
            options: Sampling options with total_steps resolved
        """
        if options.total_steps is None:
            raise ValueError("StepIterator needs options with total_steps set")
        self.options = options

    def indices(self) -> List[int]:
        stride = self.options.stride
        if stride < 1:
            return []
        return [self.options.offset + i * stride for i in range(self.options.sample_count)]

    def __iter__(self) -> Iterator[Tuple[int, int, SamplingOptions]]:
        for ordinal, step in enumerate(self.indices()):
            yield ordinal, step, self.options

    def __call__(self, consumer: StepConsumer) -> None:
        for ordinal, step, options in self:
            consumer(ordinal, step, options)

    def __len__(self) -> int:
        return len(self.indices())

    def __repr__(self) -> str:
        return (
            f"StepIterator(samples={len(self)}, offset={self.options.offset}, "
            f"stride={self.options.stride})"
        )


def get_step_iterator(
    options: Optional[SamplingOptions], default_total_steps: int
) -> StepIterator:
    """
    Build a StepIterator, filling in total_steps when unset.

    Args:
        options: Sampling options (defaults used when None)
        default_total_steps: Range to sample when options.total_steps is None

    Returns:
        StepIterator over the effective options
    """
    options = options if options is not None else SamplingOptions()
    return StepIterator(options.resolve(default_total_steps))
