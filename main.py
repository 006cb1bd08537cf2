import asyncio
import argparse
import sys
from pathlib import Path
from dataset_analyzer.pipeline import AnalysisPipeline
from dataset_analyzer.utils.logging_config import setup_logging
from dataset_analyzer.config import get_config
from dataset_analyzer.datasets.catalog import CATALOG

def main():
    """Main entry point for the dataset analyzer"""
    parser = argparse.ArgumentParser(description="Dataset analysis and report generation")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--data-path", help="Path to a CSV file")
    source.add_argument("--dataset", choices=sorted(CATALOG), help="Bundled sample dataset")
    parser.add_argument("--name", help="Display name of the dataset")
    parser.add_argument("--target-column", help="Name of the target column")
    parser.add_argument("--output-dir", help="Directory to write the report to")
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument("--log-level", default=None, help="Logging level")

    args = parser.parse_args()

    # Load configuration
    config = get_config(args.config)

    # Setup logging
    setup_logging(log_level=args.log_level or config.logging_level, log_dir=config.paths.LOGS_DIR)

    # Validate data path exists
    if args.data_path and not Path(args.data_path).exists():
        print(f"Error: Data file not found at {args.data_path}")
        sys.exit(1)

    output_dir = args.output_dir or str(config.get_report_dir())

    async def run_pipeline():
        """Run the analysis pipeline"""
        pipeline = AnalysisPipeline()

        return await pipeline.run_pipeline(
            data_path=args.data_path,
            dataset_key=args.dataset,
            dataset_name=args.name,
            target_column=args.target_column,
            output_dir=output_dir
        )

    result = asyncio.run(run_pipeline())

    if result.get('status') == 'failed':
        print(f"❌ Analysis failed: {result.get('error')}")
        sys.exit(1)

    if result.get('errors'):
        for error in result['errors']:
            print(f"❌ {error}")
        sys.exit(1)

    rows, columns = result['dataset'].shape
    quality_report = result.get('quality_report')

    print("🎉 Analysis completed successfully!")
    print(f"Dataset: {result.get('dataset_name')} ({rows} rows, {columns} columns)")
    if quality_report is not None:
        print(f"Missing values: {quality_report.total_nulls} ({quality_report.null_percentage}%)")
        print(f"Suitable for ML: {'yes' if quality_report.is_suitable_for_ml else 'no'}")
        if quality_report.imbalance is not None:
            print(f"Target balance ({quality_report.imbalance.target_column}): {quality_report.imbalance.ratio}")
    print(f"Report: {result.get('report_path', 'Not saved')}")

if __name__ == "__main__":
    main()
