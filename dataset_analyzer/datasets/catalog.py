# dataset_analyzer/datasets/catalog.py
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

DATASETS_DIR = Path(__file__).parent


@dataclass(frozen=True)
class DatasetEntry:
    """A bundled sample dataset"""
    key: str
    display_name: str
    filename: str
    description: str
    task: str
    target_column: Optional[str] = None

    @property
    def path(self) -> Path:
        return DATASETS_DIR / self.filename

    def to_dict(self) -> Dict:
        return {
            'key': self.key,
            'display_name': self.display_name,
            'description': self.description,
            'task': self.task,
            'target_column': self.target_column,
        }


CATALOG: Dict[str, DatasetEntry] = {
    'titanic': DatasetEntry(
        key='titanic',
        display_name='Titanic Dataset',
        filename='titanic.csv',
        description='Passenger information and survival outcomes from the Titanic disaster.',
        task='classification',
        target_column='Survived',
    ),
    'students': DatasetEntry(
        key='students',
        display_name='Students Performance Dataset',
        filename='students.csv',
        description='Student demographics and test scores across multiple subjects.',
        task='regression',
    ),
}


def list_datasets() -> List[DatasetEntry]:
    return list(CATALOG.values())


def get_dataset_entry(key: str) -> DatasetEntry:
    """Look up a bundled dataset; raises KeyError for unknown keys"""
    try:
        return CATALOG[key]
    except KeyError:
        raise KeyError(f"Unknown dataset '{key}'. Available: {', '.join(CATALOG)}") from None


def load_dataset_text(key: str) -> str:
    entry = get_dataset_entry(key)
    logger.info(f"Loading bundled dataset '{entry.display_name}' from {entry.path}")
    return entry.path.read_text(encoding='utf-8')
