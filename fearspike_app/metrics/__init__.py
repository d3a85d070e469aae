"""Forward return and aggregate calculations"""

from .returns import (
    ReturnCalculator,
    average_return,
    benchmark_average,
    forward_return,
    percent_return,
    with_returns,
)

__all__ = [
    "ReturnCalculator",
    "average_return",
    "benchmark_average",
    "forward_return",
    "percent_return",
    "with_returns",
]
