# dataset_analyzer/api/main.py
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel
from typing import Dict, Any, Optional, List
import logging
import uvicorn
from datetime import datetime

from dataset_analyzer.config import get_config
from dataset_analyzer.core.report import REPORT_MIME_TYPE
from dataset_analyzer.datasets.catalog import get_dataset_entry, list_datasets
from dataset_analyzer.pipeline import AnalysisPipeline
from dataset_analyzer.utils.logging_config import configure_third_party_logging, setup_logging

logger = logging.getLogger(__name__)

config = get_config()

# Initialize FastAPI app
app = FastAPI(
    title="Dataset Analyzer API",
    description="Column types, statistics and data quality for small CSV datasets",
    version="1.0.0",
    docs_url="/docs" if config.deployment.ENABLE_DOCS else None
)

if config.deployment.ENABLE_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Global pipeline instance
pipeline = None

class AnalysisRequest(BaseModel):
    csv_text: str
    dataset_name: str = "Dataset"
    target_column: Optional[str] = None

class DatasetResponse(BaseModel):
    key: str
    display_name: str
    description: str
    task: str
    target_column: Optional[str] = None

class AnalysisResponse(BaseModel):
    dataset_name: str
    target_column: Optional[str] = None
    shape: List[int]
    columns: List[str]
    head: List[Dict[str, Any]]
    tail: List[Dict[str, Any]]
    column_profiles: List[Dict[str, Any]]
    statistics: Dict[str, Dict[str, Any]]
    quality: Optional[Dict[str, Any]] = None
    report_filename: str

@app.on_event("startup")
async def startup_event():
    """Initialize the pipeline on startup"""
    global pipeline
    setup_logging(log_level=config.logging_level, log_dir=config.paths.LOGS_DIR, log_to_file=False)
    configure_third_party_logging()
    pipeline = AnalysisPipeline()
    logger.info("Pipeline initialized successfully")

async def _run(**kwargs) -> dict:
    """Run the pipeline and turn its failures into HTTP errors"""
    if pipeline is None:
        raise HTTPException(status_code=500, detail="Pipeline not initialized")

    result = await pipeline.run_pipeline(**kwargs)

    if result.get("status") == "failed":
        raise HTTPException(status_code=500, detail=result.get("error"))
    if result.get("errors"):
        raise HTTPException(status_code=400, detail="; ".join(result["errors"]))
    return result

def _to_response(result: dict) -> AnalysisResponse:
    dataset = result["dataset"]
    data_info = result["data_info"]
    quality_report = result.get("quality_report")

    return AnalysisResponse(
        dataset_name=result["dataset_name"],
        target_column=result.get("target_column"),
        shape=list(dataset.shape),
        columns=dataset.columns,
        head=data_info["head"],
        tail=data_info["tail"],
        column_profiles=[p.to_dict() for p in result.get("column_profiles") or []],
        statistics={name: s.to_dict() for name, s in (result.get("statistics") or {}).items()},
        quality=quality_report.to_dict() if quality_report else None,
        report_filename=result["report_filename"]
    )

def _report_download(result: dict) -> Response:
    return Response(
        content=result["report"],
        media_type=REPORT_MIME_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{result["report_filename"]}"'}
    )

def _catalog_entry(key: str):
    try:
        return get_dataset_entry(key)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Dataset not found: {key}")

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}

@app.get("/datasets", response_model=List[DatasetResponse])
async def get_datasets():
    """List the bundled sample datasets"""
    return [DatasetResponse(**entry.to_dict()) for entry in list_datasets()]

@app.get("/datasets/{key}/analysis", response_model=AnalysisResponse)
async def analyze_dataset(key: str, target_column: Optional[str] = None):
    """Analyze a bundled dataset"""
    entry = _catalog_entry(key)
    result = await _run(dataset_key=entry.key, target_column=target_column)
    return _to_response(result)

@app.get("/datasets/{key}/report")
async def download_dataset_report(key: str, target_column: Optional[str] = None):
    """Download the Markdown report of a bundled dataset"""
    entry = _catalog_entry(key)
    result = await _run(dataset_key=entry.key, target_column=target_column)
    return _report_download(result)

@app.post("/analysis", response_model=AnalysisResponse)
async def analyze_csv(request: AnalysisRequest):
    """Analyze CSV text sent in the request body"""
    result = await _run(
        csv_text=request.csv_text,
        dataset_name=request.dataset_name,
        target_column=request.target_column
    )
    return _to_response(result)

@app.post("/report")
async def download_csv_report(request: AnalysisRequest):
    """Render the Markdown report of CSV text sent in the request body"""
    result = await _run(
        csv_text=request.csv_text,
        dataset_name=request.dataset_name,
        target_column=request.target_column
    )
    return _report_download(result)

@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Dataset Analyzer API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }

if __name__ == "__main__":
    uvicorn.run(
        "dataset_analyzer.api.main:app",
        host=config.deployment.DEFAULT_HOST,
        port=config.deployment.DEFAULT_PORT,
        reload=config.debug_mode,
        log_level="info"
    )
