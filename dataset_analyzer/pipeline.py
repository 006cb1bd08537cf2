# dataset_analyzer/pipeline.py
from langgraph.graph import END, StateGraph
from typing import TypedDict, Dict, Optional, List
from datetime import datetime
import logging

from dataset_analyzer.core.csv_parser import Dataset
from dataset_analyzer.core.inference import ColumnProfile
from dataset_analyzer.core.quality import QualityReport
from dataset_analyzer.core.statistics import StatisticsSummary
from dataset_analyzer.utils.logging_config import PipelineLogger, log_async_execution_time

logger = logging.getLogger(__name__)

class AnalysisState(TypedDict, total=False):
    """State shared across all agents"""
    # Input
    csv_text: Optional[str]
    data_path: Optional[str]
    dataset_key: Optional[str]
    dataset_name: str
    target_column: Optional[str]
    output_dir: Optional[str]

    # Ingestion
    dataset: Optional[Dataset]
    data_info: Optional[dict]

    # Analysis
    column_profiles: Optional[List[ColumnProfile]]
    statistics: Optional[Dict[str, StatisticsSummary]]
    quality_report: Optional[QualityReport]

    # Report
    report: Optional[str]
    report_filename: Optional[str]
    report_path: Optional[str]

    # Workflow
    current_step: str
    next_action: str
    errors: List[str]
    execution_log: List[str]

class AnalysisPipeline:
    def __init__(self):
        """Initialize the dataset analysis pipeline"""
        self.graph = self._build_graph()
        self.compiled_graph = self.graph.compile()

        logger.info("Dataset analysis pipeline initialized successfully")

    def _build_graph(self) -> StateGraph:
        """Build the LangGraph workflow"""
        from dataset_analyzer.agents.data_agent import DataIngestionAgent
        from dataset_analyzer.agents.analysis_agent import DataAnalysisAgent
        from dataset_analyzer.agents.report_agent import ReportAgent

        # Initialize agents
        data_agent = DataIngestionAgent()
        analysis_agent = DataAnalysisAgent()
        report_agent = ReportAgent()

        workflow = StateGraph(AnalysisState)

        # Add nodes
        workflow.add_node("data_ingestion", data_agent.process)
        workflow.add_node("data_analysis", analysis_agent.analyze)
        workflow.add_node("quality_assessment", analysis_agent.assess)
        workflow.add_node("report_generation", report_agent.generate)
        workflow.add_node("report_export", report_agent.export)

        workflow.set_entry_point("data_ingestion")

        # Empty datasets skip straight to the report
        workflow.add_conditional_edges(
            "data_ingestion",
            self._route_after_ingestion,
            {
                "analyze": "data_analysis",
                "report": "report_generation",
                "error": END
            }
        )

        workflow.add_conditional_edges(
            "data_analysis",
            self._route_on_error("quality_assessment"),
            {"quality_assessment": "quality_assessment", "error": END}
        )
        workflow.add_conditional_edges(
            "quality_assessment",
            self._route_on_error("report_generation"),
            {"report_generation": "report_generation", "error": END}
        )

        workflow.add_conditional_edges(
            "report_generation",
            self._route_after_report,
            {
                "export": "report_export",
                "done": END,
                "error": END
            }
        )
        workflow.add_edge("report_export", END)

        return workflow

    def _route_after_ingestion(self, state: AnalysisState) -> str:
        """Route based on the ingestion outcome"""
        next_action = state.get("next_action")

        if next_action == "data_analysis":
            return "analyze"
        elif next_action == "report_generation":
            return "report"
        else:
            return "error"

    @staticmethod
    def _route_on_error(next_node: str):
        def route(state: AnalysisState) -> str:
            return "error" if state.get("next_action") == "error" else next_node
        return route

    def _route_after_report(self, state: AnalysisState) -> str:
        next_action = state.get("next_action")

        if next_action == "error":
            return "error"
        elif next_action == "report_export":
            return "export"
        else:
            return "done"

    @log_async_execution_time
    async def run_pipeline(self,
                           csv_text: Optional[str] = None,
                           data_path: Optional[str] = None,
                           dataset_key: Optional[str] = None,
                           dataset_name: Optional[str] = None,
                           target_column: Optional[str] = None,
                           output_dir: Optional[str] = None) -> dict:
        """Execute the complete analysis pipeline"""

        # Initial state
        initial_state = AnalysisState(
            csv_text=csv_text,
            data_path=data_path,
            dataset_key=dataset_key,
            dataset_name=dataset_name or "",
            target_column=target_column,
            output_dir=output_dir,
            current_step="initialization",
            next_action="data_ingestion",
            errors=[],
            execution_log=[f"Pipeline started at {datetime.now()}"]
        )

        run_name = dataset_name or dataset_key or data_path or "inline CSV"

        try:
            with PipelineLogger(f"analysis of {run_name}", logger) as step:
                final_state = await self.compiled_graph.ainvoke(initial_state)

                final_state["execution_log"].append(
                    f"Pipeline completed at {datetime.now()}"
                )
                step.log_metric("errors", len(final_state.get("errors", [])))

            return final_state

        except Exception as e:
            logger.error(f"Pipeline failed for {run_name}: {str(e)}")
            return {
                "status": "failed",
                "error": str(e),
                "dataset_name": run_name
            }
