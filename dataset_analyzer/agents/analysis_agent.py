# dataset_analyzer/agents/analysis_agent.py
import logging

from dataset_analyzer.core.inference import get_column_profiles
from dataset_analyzer.core.quality import assess_quality
from dataset_analyzer.core.statistics import describe

logger = logging.getLogger(__name__)

class DataAnalysisAgent:
    """Agent computing column profiles, statistics and the quality report"""

    async def analyze(self, state: dict) -> dict:
        """Profile every column and compute its statistics"""
        logger.info("Starting data analysis")

        try:
            dataset = state['dataset']

            profiles = get_column_profiles(dataset)
            statistics = describe(dataset)

            state.update({
                'column_profiles': profiles,
                'statistics': statistics,
                'current_step': 'data_analysis',
                'next_action': 'quality_assessment'
            })

            numeric = sum(1 for s in statistics.values() if s.is_numeric)
            state['execution_log'].append(
                f"Data analysis completed: {len(profiles)} columns profiled, {numeric} numeric"
            )

            return state

        except Exception as e:
            logger.error(f"Data analysis failed: {str(e)}")
            state['errors'].append(f"Data analysis error: {str(e)}")
            state['next_action'] = 'error'
            return state

    async def assess(self, state: dict) -> dict:
        """Assess missing values, ML suitability and target balance"""
        logger.info("Starting quality assessment")

        try:
            quality_report = assess_quality(state['dataset'], state.get('target_column'))

            state.update({
                'quality_report': quality_report,
                'current_step': 'quality_assessment',
                'next_action': 'report_generation'
            })

            if quality_report is None:
                state['execution_log'].append("Quality assessment skipped: empty dataset")
            else:
                state['execution_log'].append(
                    f"Quality assessment completed: {quality_report.total_nulls} missing values, "
                    f"suitable for ML: {quality_report.is_suitable_for_ml}"
                )

            return state

        except Exception as e:
            logger.error(f"Quality assessment failed: {str(e)}")
            state['errors'].append(f"Quality assessment error: {str(e)}")
            state['next_action'] = 'error'
            return state
