"""API route definitions for the UI highlight generator."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel

from ..core.batch import BatchOrchestrator, PairState
from ..core.exceptions import BatchNotReadyError, ExportError
from ..core.logger import log
from ..core.uploads import StarletteUpload

# Create router instances
batch_router = APIRouter()

# Global orchestrator instance
orchestrator_instance: Optional[BatchOrchestrator] = None


def get_orchestrator() -> BatchOrchestrator:
    """Get or create the global batch orchestrator."""
    global orchestrator_instance
    if orchestrator_instance is None:
        orchestrator_instance = BatchOrchestrator()
    return orchestrator_instance


# Pydantic models for request/response
class UploadResponse(BaseModel):
    """Response model after the upload collections change."""
    status: str
    message: str
    can_generate: bool
    layout_dumps: int
    screenshots: int


class StatusResponse(BaseModel):
    """Response model for the current batch status."""
    status: str
    message: str
    can_generate: bool
    pairs: List[Dict[str, Any]]


class ReportResponse(BaseModel):
    """Response model for a finished run."""
    status: str
    message: str
    succeeded: List[str]
    failed: Dict[str, str]


@batch_router.put("/uploads", response_model=UploadResponse)
async def upload_files(
    layout_dumps: Optional[List[UploadFile]] = File(None),
    screenshots: Optional[List[UploadFile]] = File(None),
    orchestrator: BatchOrchestrator = Depends(get_orchestrator),
):
    """Replace the uploaded layout dumps and screenshots."""
    dumps = [await StarletteUpload(upload).detach() for upload in layout_dumps or []]
    images = [await StarletteUpload(upload).detach() for upload in screenshots or []]

    status = orchestrator.update_uploads(dumps, images)
    log.info(f"Uploads updated: {len(dumps)} layout dump(s), {len(images)} screenshot(s)")

    return UploadResponse(
        status=status.name,
        message=status.text,
        can_generate=orchestrator.can_generate,
        layout_dumps=len(dumps),
        screenshots=len(images),
    )


@batch_router.post("/generate", response_model=ReportResponse)
async def generate_highlights(orchestrator: BatchOrchestrator = Depends(get_orchestrator)):
    """Run the highlight pipeline for every uploaded pair."""
    try:
        report = await orchestrator.run()
    except BatchNotReadyError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return ReportResponse(**report.to_dict())


@batch_router.get("/status", response_model=StatusResponse)
async def get_status(orchestrator: BatchOrchestrator = Depends(get_orchestrator)):
    """Get the aggregate status and the state of every pair."""
    status = orchestrator.status
    return StatusResponse(
        status=status.name,
        message=status.text,
        can_generate=orchestrator.can_generate,
        pairs=[result.to_dict() for result in orchestrator.results.values()],
    )


@batch_router.get("/results/{name}")
async def get_result(name: str, orchestrator: BatchOrchestrator = Depends(get_orchestrator)):
    """Download the annotated image for one pair."""
    result = orchestrator.results.get(name)
    if result is None or result.state is not PairState.DONE or result.image is None:
        raise HTTPException(status_code=404, detail=f"No highlight image for {name}")

    return Response(content=result.image.data, media_type=result.image.media_type)


@batch_router.get("/export")
async def export_results(orchestrator: BatchOrchestrator = Depends(get_orchestrator)):
    """Download every completed image as a ZIP archive."""
    try:
        archive = orchestrator.export_archive()
    except ExportError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return Response(
        content=archive,
        media_type="application/zip",
        headers={"Content-Disposition": 'attachment; filename="highlights.zip"'},
    )
