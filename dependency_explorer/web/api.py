"""FastAPI routes for dependency analysis."""

from __future__ import annotations

import asyncio
from pathlib import Path

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from dependency_explorer import __version__
from dependency_explorer.models import AnalysisConfig
from dependency_explorer.pipeline import analyze_directory, analyze_files
from dependency_explorer.web.state import AnalysisSession, state

router = APIRouter(prefix="/api")


# --- Request models ---

class AnalysisOptions(BaseModel):
    rails_aware: bool = False
    normalize_cycles: bool = False
    pattern: str = "*.rb"


class SourceRequest(AnalysisOptions):
    source: str | None = None
    files: dict[str, str] | None = None


class DirectoryRequest(AnalysisOptions):
    path: str


def _config(options: AnalysisOptions, source_dir: Path | None = None) -> AnalysisConfig:
    config = AnalysisConfig(
        pattern=options.pattern,
        rails_aware=options.rails_aware,
        normalize_cycles=options.normalize_cycles,
    )
    if source_dir is not None:
        config.source_dir = source_dir
    return config


def _validate_dir(p: str) -> Path:
    resolved = Path(p).expanduser().resolve()
    if not resolved.is_dir():
        raise HTTPException(400, f"Not a directory: {resolved}")
    return resolved


def _get_session(analysis_id: str) -> AnalysisSession:
    session = state.get(analysis_id)
    if not session:
        raise HTTPException(404, f"Analysis not found: {analysis_id}")
    return session


def _response(session: AnalysisSession) -> dict:
    return {**session.summary(), "result": session.result.to_dict()}


def _cycles_payload(result) -> dict:
    return {
        "circular_dependencies": result.circular_dependencies,
        "cross_namespace_cycles": [c.to_dict() for c in result.cross_namespace_cycles],
    }


def _depth_payload(result) -> dict:
    return {"dependency_depth": result.dependency_depth}


def _boundaries_payload(result) -> dict:
    return {
        "violations": [v.to_dict() for v in result.boundary_violations],
        "health_score": result.boundary_health_score,
    }


# --- Endpoints ---

@router.get("/health")
async def health():
    return {"status": "ok", "version": __version__}


@router.post("/analysis")
async def analyze_source(req: SourceRequest):
    if req.files:
        files = req.files
        origin = "files"
    elif req.source is not None:
        files = {"<inline>": req.source}
        origin = "inline"
    else:
        raise HTTPException(400, "Provide either 'source' or 'files'")

    result = await asyncio.to_thread(analyze_files, files, _config(req))
    session = state.add(AnalysisSession(result=result, source=origin, file_count=len(files)))
    return await asyncio.to_thread(_response, session)


@router.post("/analysis/directory")
async def analyze_path(req: DirectoryRequest):
    source_dir = _validate_dir(req.path)
    config = _config(req, source_dir)
    try:
        result = await asyncio.to_thread(analyze_directory, config)
    except ValueError as e:
        raise HTTPException(400, str(e))

    session = state.add(AnalysisSession(result=result, source=str(source_dir)))
    return await asyncio.to_thread(_response, session)


@router.get("/analysis")
async def list_analyses():
    return {"analyses": [s.summary() for s in state.list()]}


@router.get("/analysis/{analysis_id}")
async def get_analysis(analysis_id: str):
    return await asyncio.to_thread(_response, _get_session(analysis_id))


@router.get("/analysis/{analysis_id}/cycles")
async def get_cycles(analysis_id: str):
    return await asyncio.to_thread(_cycles_payload, _get_session(analysis_id).result)


@router.get("/analysis/{analysis_id}/depth")
async def get_depth(analysis_id: str):
    return await asyncio.to_thread(_depth_payload, _get_session(analysis_id).result)


@router.get("/analysis/{analysis_id}/boundaries")
async def get_boundaries(analysis_id: str):
    return await asyncio.to_thread(_boundaries_payload, _get_session(analysis_id).result)


@router.delete("/analysis/{analysis_id}")
async def delete_analysis(analysis_id: str):
    if not state.delete(analysis_id):
        raise HTTPException(404, f"Analysis not found: {analysis_id}")
    return {"deleted": analysis_id}
