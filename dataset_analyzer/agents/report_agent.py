# dataset_analyzer/agents/report_agent.py
import logging

from dataset_analyzer.core.report import generate_report, report_filename, save_report

logger = logging.getLogger(__name__)

class ReportAgent:
    """Agent rendering the Markdown report and writing it to disk"""

    async def generate(self, state: dict) -> dict:
        """Render the report for the current dataset"""
        logger.info("Starting report generation")

        try:
            dataset_name = state['dataset_name']
            report = generate_report(dataset_name, state['dataset'], state.get('target_column'))

            state.update({
                'report': report,
                'report_filename': report_filename(dataset_name),
                'current_step': 'report_generation',
                'next_action': 'report_export' if state.get('output_dir') else 'completed'
            })

            state['execution_log'].append(f"Report generated: {len(report.splitlines())} lines")
            return state

        except Exception as e:
            logger.error(f"Report generation failed: {str(e)}")
            state['errors'].append(f"Report generation error: {str(e)}")
            state['next_action'] = 'error'
            return state

    async def export(self, state: dict) -> dict:
        """Write the rendered report under output_dir"""
        logger.info(f"Exporting report to {state.get('output_dir')}")

        try:
            path = save_report(state['report'], state['report_filename'], state['output_dir'])

            state.update({
                'report_path': str(path),
                'current_step': 'report_export',
                'next_action': 'completed'
            })

            state['execution_log'].append(f"Report saved: {path}")
            return state

        except Exception as e:
            logger.error(f"Report export failed: {str(e)}")
            state['errors'].append(f"Report export error: {str(e)}")
            state['next_action'] = 'error'
            return state
