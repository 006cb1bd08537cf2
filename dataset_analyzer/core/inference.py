# dataset_analyzer/core/inference.py
import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, List, Sequence

from dataset_analyzer.core.csv_parser import Dataset, Value, parse_number

logger = logging.getLogger(__name__)


class FeatureType(str, Enum):
    """Semantic type of a column"""
    NUMERICAL = 'numerical'
    CATEGORICAL = 'categorical'
    BINARY = 'binary'
    # Declared for completeness; infer_column_type never returns it
    ORDINAL = 'ordinal'


class StorageKind(str, Enum):
    NUMBER = 'number'
    TEXT = 'text'


MAX_CATEGORICAL_UNIQUE = 10


@dataclass(frozen=True)
class ColumnProfile:
    """Derived metadata for a single column"""
    name: str
    feature_type: FeatureType
    storage_kind: StorageKind
    null_count: int
    unique_count: int

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['feature_type'] = self.feature_type.value
        data['storage_kind'] = self.storage_kind.value
        return data


def non_null_values(values: Sequence[Value]) -> List[Value]:
    """Drop nulls and empty strings"""
    return [v for v in values if v is not None and v != '']


def is_fully_numeric(values: Sequence[Value]) -> bool:
    """True if there is at least one non-null value and every one of them is a number"""
    present = non_null_values(values)
    return len(present) > 0 and all(parse_number(v) is not None for v in present)


def infer_column_type(values: Sequence[Value]) -> FeatureType:
    """Classify a column; the first matching rule wins"""
    present = non_null_values(values)
    unique_values = set(present)

    # 1. Two distinct values, numeric or not
    if len(unique_values) == 2:
        return FeatureType.BINARY

    # 2. Numeric wherever present
    if is_fully_numeric(present):
        return FeatureType.NUMERICAL

    # 3. Low cardinality
    if 2 < len(unique_values) <= MAX_CATEGORICAL_UNIQUE:
        return FeatureType.CATEGORICAL

    return FeatureType.CATEGORICAL


def profile_values(name: str, values: Sequence[Value]) -> ColumnProfile:
    present = non_null_values(values)
    storage_kind = StorageKind.NUMBER if is_fully_numeric(present) else StorageKind.TEXT

    return ColumnProfile(
        name=name,
        feature_type=infer_column_type(values),
        storage_kind=storage_kind,
        null_count=len(values) - len(present),
        unique_count=len(set(present)),
    )


def get_column_profile(dataset: Dataset, column_name: str) -> ColumnProfile:
    """Profile one column of a dataset (unknown columns read as all nulls)"""
    return profile_values(column_name, dataset.column_values(column_name))


def get_column_profiles(dataset: Dataset) -> List[ColumnProfile]:
    return [get_column_profile(dataset, column) for column in dataset.columns]
