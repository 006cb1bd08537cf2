# dataset_analyzer/core/report.py
import re
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from dataset_analyzer.core.csv_parser import Dataset, format_value, to_fixed
from dataset_analyzer.core.inference import StorageKind
from dataset_analyzer.core.quality import QualityReport, assess_quality
from dataset_analyzer.core.statistics import NUMERIC_STATISTICS, get_column_statistics

logger = logging.getLogger(__name__)

REPORT_SUFFIX = '_analysis_report.md'
REPORT_MIME_TYPE = 'text/markdown'
BYTES_PER_CELL = 8

FIXED_RECOMMENDATIONS = [
    "Perform feature engineering to create more meaningful features from existing ones.",
    "Consider feature scaling for numerical features before model training.",
    "Split data into training, validation, and test sets with stratification if dealing with classification.",
]


def report_filename(dataset_name: str) -> str:
    """File name for a dataset's report, e.g. 'titanic_dataset_analysis_report.md'"""
    return re.sub(r'\s+', '_', dataset_name.lower()) + REPORT_SUFFIX


def save_report(content: str, filename: str, directory: Union[str, Path]) -> Path:
    """Write report text under directory and return the file path"""
    output_dir = Path(directory)
    output_dir.mkdir(parents=True, exist_ok=True)

    path = output_dir / filename
    path.write_text(content, encoding='utf-8')
    logger.info(f"Report saved to {path}")
    return path


def memory_usage_kb(rows: int, columns: int) -> str:
    return to_fixed(rows * columns * BYTES_PER_CELL / 1024, 2)


def _overview(dataset_name: str, rows: int, columns: int) -> List[str]:
    return [
        "## 1. Dataset Overview",
        "",
        f"- **Dataset:** {dataset_name}",
        f"- **Number of Rows:** {rows}",
        f"- **Number of Columns:** {columns}",
        f"- **Memory Usage:** {memory_usage_kb(rows, columns)} KB",
        "",
    ]


def _structure(quality: QualityReport) -> List[str]:
    lines = [
        "## 2. Data Types and Structure",
        "",
        "### Column Information:",
        "",
        "| Column | Non-Null Count | Data Type | Feature Type | Unique Values |",
        "|--------|----------------|-----------|--------------|---------------|",
    ]
    for profile in quality.profiles:
        lines.append(
            f"| {profile.name} | {quality.rows - profile.null_count} | {profile.storage_kind.value} "
            f"| {profile.feature_type.value} | {profile.unique_count} |"
        )
    lines.append("")

    tally = quality.feature_types
    lines.extend([
        "### Feature Types Summary:",
        f"- **Numerical Features:** {tally['numerical']}",
        f"- **Categorical Features:** {tally['categorical']}",
        f"- **Binary Features:** {tally['binary']}",
        f"- **Ordinal Features:** {tally['ordinal']}",
        "",
    ])
    return lines


def _statistics(dataset: Dataset, quality: QualityReport) -> List[str]:
    lines = ["## 3. Statistical Summary", ""]

    numeric_columns = [p.name for p in quality.profiles if p.storage_kind == StorageKind.NUMBER]
    if not numeric_columns:
        return lines

    summaries = [get_column_statistics(dataset, column) for column in numeric_columns]
    lines.extend([
        "### Numerical Statistics:",
        "",
        f"| Statistic | {' | '.join(numeric_columns)} |",
        f"|-----------|{'|'.join('---' for _ in numeric_columns)}|",
    ])
    for statistic in NUMERIC_STATISTICS:
        cells = []
        for summary in summaries:
            value = summary.get(statistic)
            # zero is a real statistic and prints as 0; only absent ones print '-'
            cells.append('-' if value is None else format_value(value))
        lines.append(f"| {statistic} | {' | '.join(cells)} |")
    lines.append("")
    return lines


def _data_quality(quality: QualityReport) -> List[str]:
    rows = quality.rows
    lines = ["## 4. Data Quality Analysis", "", "### Missing Values:"]

    if quality.has_nulls:
        lines.append(
            f"- **Total Missing Values:** {quality.total_nulls} "
            f"({to_fixed(quality.null_percentage, 2)}% of dataset)"
        )
        lines.append("- **Columns with Missing Values:**")
        for profile in quality.columns_with_nulls:
            percentage = to_fixed(profile.null_count / rows * 100, 1)
            lines.append(f"  - {profile.name}: {profile.null_count} missing ({percentage}%)")
    else:
        lines.append("- No missing values detected in the dataset.")
    lines.append("")

    lines.append("### Dataset Suitability for Machine Learning:")
    if quality.is_suitable_for_ml:
        lines.append(
            f"- Dataset is suitable for machine learning with sufficient rows ({rows}) "
            f"and features ({quality.columns})."
        )
    else:
        lines.append("- Dataset may be too small for reliable ML models. Consider collecting more data.")
    lines.append("")

    imbalance = quality.imbalance
    if imbalance is not None:
        lines.append(f"### Target Variable Analysis ({imbalance.target_column}):")
        lines.append("- **Class Distribution:**")
        for label, count in imbalance.distribution.items():
            lines.append(f"  - {label}: {count} ({to_fixed(count / rows * 100, 1)}%)")
        if imbalance.is_imbalanced:
            lines.append(f"- **Class Imbalance Detected:** Yes (ratio: {imbalance.ratio})")
            lines.append("- Consider using techniques like SMOTE, class weights, or stratified sampling.")
        else:
            lines.append("- **Class Imbalance:** No significant imbalance detected.")
        lines.append("")

    return lines


def build_observations(quality: QualityReport) -> List[str]:
    """Key observations, in a fixed order"""
    observations = []

    if quality.has_nulls:
        observations.append(
            f"The dataset contains missing values in {len(quality.columns_with_nulls)} columns, "
            "requiring imputation or removal strategies."
        )

    if quality.is_imbalanced:
        observations.append(
            "The target variable shows class imbalance, which may require special handling during model training."
        )

    if quality.has_high_cardinality:
        observations.append(
            "Some categorical features have high cardinality, which may need encoding strategies like target encoding."
        )

    if quality.is_suitable_for_ml:
        observations.append("The dataset has adequate size for machine learning modeling.")
    else:
        observations.append("Dataset size is limited, which may affect model performance and generalization.")

    return observations


def build_recommendations(quality: QualityReport) -> List[str]:
    recommendations = []

    if quality.has_nulls:
        recommendations.append(
            "Handle missing values through imputation (mean/median for numerical, mode for categorical) "
            "or removal if missingness is substantial."
        )

    if quality.is_imbalanced:
        recommendations.append(
            "Address class imbalance using oversampling (SMOTE), undersampling, or class weight adjustments."
        )

    recommendations.extend(FIXED_RECOMMENDATIONS)
    return recommendations


def _numbered(items: List[str]) -> List[str]:
    return [f"{index}. {item}" for index, item in enumerate(items, start=1)]


def _footer(generated_at: datetime) -> List[str]:
    # month, day and hour are not zero padded
    date = f"{generated_at.month}/{generated_at.day}/{generated_at.year}"
    hour = generated_at.hour % 12 or 12
    suffix = 'AM' if generated_at.hour < 12 else 'PM'
    time = f"{hour}:{generated_at.minute:02d}:{generated_at.second:02d} {suffix}"
    return ["---", f"*Report generated on {date} at {time}*"]


def generate_report(dataset_name: str,
                    dataset: Dataset,
                    target_column: Optional[str] = None,
                    generated_at: Optional[datetime] = None) -> str:
    """
    Render the Markdown analysis report for a dataset.

    Args:
        dataset_name: Display name used in the title and overview
        dataset: Parsed dataset
        target_column: Optional class column for the imbalance section
        generated_at: Timestamp for the last line, defaults to now

    Returns:
        Report text; only the last line depends on the timestamp
    """
    generated_at = generated_at or datetime.now()
    rows, columns = dataset.shape

    lines = [f"# Dataset Analysis Report: {dataset_name}", ""]
    lines.extend(_overview(dataset_name, rows, columns))

    quality = assess_quality(dataset, target_column)
    if quality is None:
        logger.warning(f"Dataset '{dataset_name}' is empty, rendering overview only")
        lines.extend(["No data available for analysis.", ""])
        lines.extend(_footer(generated_at))
        return '\n'.join(lines) + '\n'

    lines.extend(_structure(quality))
    lines.extend(_statistics(dataset, quality))
    lines.extend(_data_quality(quality))

    lines.extend(["## 5. Key Observations", ""])
    lines.extend(_numbered(build_observations(quality)))
    lines.append("")

    lines.extend(["## 6. Recommendations", ""])
    lines.extend(_numbered(build_recommendations(quality)))
    lines.append("")

    lines.extend(_footer(generated_at))
    logger.debug(f"Generated report for '{dataset_name}' ({rows} rows, {columns} columns)")
    return '\n'.join(lines) + '\n'
