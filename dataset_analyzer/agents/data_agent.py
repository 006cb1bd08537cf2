# dataset_analyzer/agents/data_agent.py
from typing import Dict, Optional
import logging
from pathlib import Path

from dataset_analyzer.config import get_config
from dataset_analyzer.core.csv_parser import Dataset, parse_csv
from dataset_analyzer.core.report import BYTES_PER_CELL
from dataset_analyzer.datasets.catalog import get_dataset_entry, load_dataset_text

logger = logging.getLogger(__name__)

class DataIngestionAgent:
    """Agent responsible for reading CSV sources into a Dataset"""

    def __init__(self, max_file_size_mb: Optional[int] = None, preview_rows: Optional[int] = None):
        config = get_config()
        self.supported_formats = ['.csv', '.txt']
        self.max_file_size_mb = max_file_size_mb or config.ingestion.MAX_FILE_SIZE_MB
        self.encodings = list(config.ingestion.ENCODINGS)
        self.preview_rows = preview_rows if preview_rows is not None else config.report.PREVIEW_ROWS

    async def process(self, state: dict) -> dict:
        """Main processing function for data ingestion"""
        source = state.get('data_path') or state.get('dataset_key') or 'inline CSV'
        logger.info(f"Starting data ingestion for: {source}")

        try:
            # Resolve the text and the display name
            csv_text = self._resolve_text(state)
            if not state.get('dataset_name'):
                state['dataset_name'] = self._default_name(state)

            dataset = parse_csv(csv_text)
            data_info = self._extract_data_info(dataset)

            state.update({
                'dataset': dataset,
                'data_info': data_info,
                'current_step': 'data_ingestion',
                'next_action': 'report_generation' if dataset.is_empty() else 'data_analysis'
            })

            rows, columns = dataset.shape
            state['execution_log'].append(
                f"Data loaded successfully: {rows} rows, {columns} columns"
            )

            return state

        except Exception as e:
            logger.error(f"Data ingestion failed: {str(e)}")
            state['errors'].append(f"Data ingestion error: {str(e)}")
            state['next_action'] = 'error'
            return state

    def _resolve_text(self, state: dict) -> str:
        """Inline text wins over a file path, which wins over a bundled dataset"""
        if state.get('csv_text') is not None:
            return state['csv_text']

        if state.get('data_path'):
            return self._load_text(state['data_path'])

        if state.get('dataset_key'):
            entry = get_dataset_entry(state['dataset_key'])
            if not state.get('target_column') and entry.target_column:
                state['target_column'] = entry.target_column
            return load_dataset_text(entry.key)

        raise ValueError("No data source given: provide csv_text, data_path or dataset_key")

    def _default_name(self, state: dict) -> str:
        if state.get('dataset_key'):
            return get_dataset_entry(state['dataset_key']).display_name
        if state.get('data_path'):
            return Path(state['data_path']).stem.replace('_', ' ').title()
        return 'Dataset'

    def _load_text(self, data_path: str) -> str:
        """Read a CSV file from disk"""
        path = Path(data_path)

        # Validate file exists
        if not path.exists():
            raise FileNotFoundError(f"Data file not found: {data_path}")

        # Check file size
        file_size_mb = path.stat().st_size / (1024 * 1024)
        if file_size_mb > self.max_file_size_mb:
            raise ValueError(f"File too large: {file_size_mb:.1f}MB > {self.max_file_size_mb}MB")

        extension = path.suffix.lower()
        if extension not in self.supported_formats:
            raise ValueError(f"Unsupported file format: {extension}")

        # Try the configured encodings in order
        for encoding in self.encodings:
            try:
                return path.read_text(encoding=encoding)
            except UnicodeDecodeError:
                logger.debug(f"Could not decode {data_path} as {encoding}")
                continue
        raise ValueError(f"Could not decode {data_path} with any of: {', '.join(self.encodings)}")

    def _extract_data_info(self, dataset: Dataset) -> Dict:
        """Shape, columns and head/tail preview of the dataset"""
        rows, columns = dataset.shape
        return {
            'shape': (rows, columns),
            'columns': dataset.columns,
            'memory_usage_kb': rows * columns * BYTES_PER_CELL / 1024,
            'head': dataset.head(self.preview_rows),
            'tail': dataset.tail(self.preview_rows),
        }
