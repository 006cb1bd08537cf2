# dataset_analyzer/core/csv_parser.py
import math
import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd

logger = logging.getLogger(__name__)

Value = Optional[Union[int, float, str]]
Record = Dict[str, Value]

NULL_TOKENS = ('', 'NA', 'NaN')


def parse_number(value: Any) -> Optional[Union[int, float]]:
    """Coerce a value to a finite number, or None if it is not one"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text or '_' in text:
        return None

    # integer literals keep their exact value
    try:
        return int(text)
    except ValueError:
        pass

    try:
        number = float(text)
    except ValueError:
        return None

    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def convert_field(raw: str) -> Value:
    """Convert one trimmed CSV field into null, a number or text"""
    if raw in NULL_TOKENS:
        return None
    number = parse_number(raw)
    return raw if number is None else number


def format_value(value: Any) -> str:
    """String representation used for frequency keys and report cells"""
    if value is None:
        return 'null'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point string, rounding the exact value half away from zero"""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def round_half_up(value: float, digits: int = 2) -> float:
    return float(to_fixed(value, digits))


@dataclass(frozen=True, eq=False)
class Dataset:
    """Immutable table of parsed records backed by an object-dtype DataFrame"""

    frame: pd.DataFrame = field(repr=False)

    @classmethod
    def from_records(cls, records: List[Record], columns: Optional[List[str]] = None) -> 'Dataset':
        """Build a dataset from records sharing one ordered key set"""
        if columns is None:
            columns = list(records[0].keys()) if records else []

        data = {
            name: pd.Series([record.get(name) for record in records], dtype=object)
            for name in columns
        }
        frame = pd.DataFrame(data, columns=columns)
        return cls(frame=frame)

    @property
    def shape(self) -> Tuple[int, int]:
        rows = len(self.frame)
        return rows, (len(self.frame.columns) if rows > 0 else 0)

    @property
    def columns(self) -> List[str]:
        if len(self.frame) == 0:
            return []
        return list(self.frame.columns)

    def is_empty(self) -> bool:
        rows, columns = self.shape
        return rows == 0 or columns == 0

    def records(self) -> List[Record]:
        return self.frame.to_dict('records')

    def column_values(self, name: str) -> List[Value]:
        """Values of a column in row order; an unknown column reads as all nulls"""
        if name not in self.frame.columns:
            return [None] * len(self.frame)
        return self.frame[name].tolist()

    def head(self, n: int = 10) -> List[Record]:
        return self.frame.head(n).to_dict('records')

    def tail(self, n: int = 10) -> List[Record]:
        if n <= 0:
            return []
        return self.frame.tail(n).to_dict('records')


def _split_line(line: str) -> List[str]:
    return [part.strip() for part in line.split(',')]


def parse_csv(csv_text: str) -> Dataset:
    """
    Parse comma separated text into a Dataset.

    The first line holds the column names. Fields are not quoted or escaped.
    Missing trailing fields become None; extra fields are ignored.
    """
    text = csv_text.strip()
    if not text:
        logger.debug("Empty CSV text, returning empty dataset")
        return Dataset.from_records([])

    # only \n separates records; a trailing \r is trimmed with the fields
    lines = text.split('\n')
    headers = _split_line(lines[0])
    # duplicate headers collapse onto their first position
    columns = list(dict.fromkeys(headers))

    records: List[Record] = []
    for line in lines[1:]:
        fields = _split_line(line)
        record: Record = {}
        for index, header in enumerate(headers):
            record[header] = convert_field(fields[index]) if index < len(fields) else None
        records.append(record)

    logger.debug(f"Parsed CSV: {len(records)} rows, {len(columns)} columns")
    return Dataset.from_records(records, columns=columns)
