# dataset_analyzer/core/statistics.py
import math
import logging
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Sequence, Union

import numpy as np

from dataset_analyzer.core.csv_parser import Dataset, Value, format_value, parse_number, round_half_up
from dataset_analyzer.core.inference import non_null_values

logger = logging.getLogger(__name__)

Number = Union[int, float]

NUMERIC_STATISTICS = ['count', 'mean', 'std', 'min', 'q25', 'q50', 'q75', 'max']
PERCENTILES = {'q25': 0.25, 'q50': 0.50, 'q75': 0.75}


@dataclass(frozen=True)
class StatisticsSummary:
    """
    Descriptive statistics for one column.

    Numeric columns fill count/mean/std/min/q25/q50/q75/max, other columns
    fill count/unique/top/freq. A column without values only has count=0.
    """
    count: int
    mean: Optional[float] = None
    std: Optional[float] = None
    min: Optional[Number] = None
    q25: Optional[Number] = None
    q50: Optional[Number] = None
    q75: Optional[Number] = None
    max: Optional[Number] = None
    unique: Optional[int] = None
    top: Optional[str] = None
    freq: Optional[int] = None

    @property
    def is_numeric(self) -> bool:
        return self.mean is not None

    def get(self, statistic: str) -> Optional[Union[Number, str]]:
        return getattr(self, statistic)

    def to_dict(self) -> Dict:
        return {key: value for key, value in asdict(self).items() if value is not None}


def percentile(sorted_values: Sequence[Number], p: float) -> Number:
    """Nearest-rank pick without interpolation; p must be below 1.0"""
    return sorted_values[math.floor(len(sorted_values) * p)]


def _numeric_summary(numbers: List[Number]) -> StatisticsSummary:
    sorted_values = sorted(numbers)
    array = np.asarray(numbers, dtype=float)

    mean = float(np.mean(array))
    # population standard deviation
    std = float(np.std(array, ddof=0))

    quartiles = {name: percentile(sorted_values, p) for name, p in PERCENTILES.items()}

    return StatisticsSummary(
        count=len(sorted_values),
        mean=round_half_up(mean, 2),
        std=round_half_up(std, 2),
        min=sorted_values[0],
        max=sorted_values[-1],
        **quartiles
    )


def _categorical_summary(values: List[Value]) -> StatisticsSummary:
    frequencies: Dict[str, int] = {}
    for value in values:
        key = format_value(value)
        frequencies[key] = frequencies.get(key, 0) + 1

    top, freq = None, 0
    for value, count in frequencies.items():
        # strict comparison keeps the first value seen on ties
        if count > freq:
            top, freq = value, count

    return StatisticsSummary(
        count=len(values),
        unique=len(set(values)),
        top=top,
        freq=freq,
    )


def calculate_statistics(values: Sequence[Value]) -> StatisticsSummary:
    """Summarize the non-null values of a column"""
    present = non_null_values(values)
    if not present:
        return StatisticsSummary(count=0)

    numbers = [parse_number(v) for v in present]
    if all(n is not None for n in numbers):
        return _numeric_summary(numbers)

    return _categorical_summary(present)


def get_column_statistics(dataset: Dataset, column_name: str) -> StatisticsSummary:
    return calculate_statistics(dataset.column_values(column_name))


def describe(dataset: Dataset) -> Dict[str, StatisticsSummary]:
    """Statistics for every column, in column order"""
    return {column: get_column_statistics(dataset, column) for column in dataset.columns}
