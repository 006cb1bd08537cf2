# dataset_analyzer/core/quality.py
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from dataset_analyzer.core.csv_parser import Dataset, format_value, round_half_up
from dataset_analyzer.core.inference import (
    MAX_CATEGORICAL_UNIQUE,
    ColumnProfile,
    FeatureType,
    get_column_profiles,
)

logger = logging.getLogger(__name__)

# Fixed heuristics for dataset readiness
ML_MIN_ROWS = 30
ML_MIN_COLUMNS = 2
IMBALANCE_THRESHOLD = 1.5


@dataclass(frozen=True)
class ImbalanceReport:
    """Class distribution of a target column"""
    target_column: str
    distribution: Dict[str, int]
    ratio: str
    is_imbalanced: bool

    def to_dict(self) -> Dict:
        return {
            'target_column': self.target_column,
            'distribution': dict(self.distribution),
            'ratio': self.ratio,
            'is_imbalanced': self.is_imbalanced,
        }


@dataclass(frozen=True)
class QualityReport:
    rows: int
    columns: int
    profiles: List[ColumnProfile]
    columns_with_nulls: List[ColumnProfile]
    total_nulls: int
    null_percentage: float
    is_suitable_for_ml: bool
    feature_types: Dict[str, int]
    imbalance: Optional[ImbalanceReport] = None

    @property
    def has_nulls(self) -> bool:
        return len(self.columns_with_nulls) > 0

    @property
    def is_imbalanced(self) -> bool:
        return self.imbalance is not None and self.imbalance.is_imbalanced

    @property
    def has_high_cardinality(self) -> bool:
        return any(
            p.feature_type == FeatureType.CATEGORICAL and p.unique_count > MAX_CATEGORICAL_UNIQUE
            for p in self.profiles
        )

    def to_dict(self) -> Dict:
        return {
            'rows': self.rows,
            'columns': self.columns,
            'total_nulls': self.total_nulls,
            'null_percentage': self.null_percentage,
            'columns_with_nulls': {p.name: p.null_count for p in self.columns_with_nulls},
            'is_suitable_for_ml': self.is_suitable_for_ml,
            'feature_types': dict(self.feature_types),
            'imbalance': self.imbalance.to_dict() if self.imbalance else None,
        }


def is_suitable_for_ml(rows: int, columns: int) -> bool:
    """Size heuristic: at least 30 rows and 2 columns"""
    return rows >= ML_MIN_ROWS and columns >= ML_MIN_COLUMNS


def check_imbalance(dataset: Dataset, target_column: str) -> ImbalanceReport:
    """Frequency of each target class and the min:max ratio between them"""
    distribution: Dict[str, int] = {}
    for value in dataset.column_values(target_column):
        if value is None:
            continue
        key = format_value(value)
        distribution[key] = distribution.get(key, 0) + 1

    if not distribution:
        logger.warning(f"Target column '{target_column}' has no values")
        return ImbalanceReport(target_column, distribution, '0:0', False)

    max_count = max(distribution.values())
    min_count = min(distribution.values())

    return ImbalanceReport(
        target_column=target_column,
        distribution=distribution,
        ratio=f"{min_count}:{max_count}",
        is_imbalanced=max_count / min_count > IMBALANCE_THRESHOLD,
    )


def count_feature_types(profiles: List[ColumnProfile]) -> Dict[str, int]:
    tally = {feature_type.value: 0 for feature_type in FeatureType}
    for profile in profiles:
        tally[profile.feature_type.value] += 1
    return tally


def assess_quality(dataset: Dataset, target_column: Optional[str] = None) -> Optional[QualityReport]:
    """
    Aggregate missing values, ML suitability and target balance.

    Returns None for a dataset without rows or columns.
    """
    rows, columns = dataset.shape
    if rows == 0 or columns == 0:
        logger.info("Dataset is empty, skipping quality assessment")
        return None

    profiles = get_column_profiles(dataset)
    columns_with_nulls = [p for p in profiles if p.null_count > 0]
    total_nulls = sum(p.null_count for p in profiles)
    null_percentage = round_half_up(total_nulls / (rows * columns) * 100, 2)

    imbalance = None
    if target_column and target_column in dataset.columns:
        imbalance = check_imbalance(dataset, target_column)
    elif target_column:
        logger.warning(f"Target column '{target_column}' not found, skipping imbalance check")

    return QualityReport(
        rows=rows,
        columns=columns,
        profiles=profiles,
        columns_with_nulls=columns_with_nulls,
        total_nulls=total_nulls,
        null_percentage=null_percentage,
        is_suitable_for_ml=is_suitable_for_ml(rows, columns),
        feature_types=count_feature_types(profiles),
        imbalance=imbalance,
    )
