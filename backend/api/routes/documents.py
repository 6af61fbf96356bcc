"""
Document upload API routes.
"""
import logging
from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from api.errors import to_http_exception
from api.models.responses import CurriculumResponse, ProcessedDocumentResponse, SectionModel
from core.errors import PipelineError
from core.pipeline import pipeline

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/process", response_model=ProcessedDocumentResponse)
async def process_document(file: UploadFile = File(...)):
    """
    Extract and segment an uploaded document into learning sections.
    """
    data = await file.read()
    file_name = file.filename or "upload"

    try:
        document = await run_in_threadpool(pipeline.process_upload, data, file.content_type, file_name)
    except PipelineError as e:
        logger.info(f"Rejected upload {file_name}: {e}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"File processing error for {file_name}: {e}")
        raise HTTPException(status_code=500, detail="Failed to process file. Please try again.")

    return ProcessedDocumentResponse.from_document(document)


@router.post("/curriculum", response_model=CurriculumResponse)
async def document_curriculum(file: UploadFile = File(...)):
    """
    Build a generated curriculum from an uploaded document.
    """
    data = await file.read()
    file_name = file.filename or "upload"

    try:
        sections, overall_topic = await run_in_threadpool(
            pipeline.curriculum_from_document, data, file.content_type, file_name
        )
    except PipelineError as e:
        logger.info(f"Rejected upload {file_name}: {e}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Document curriculum error for {file_name}: {e}")
        raise HTTPException(status_code=500, detail="Failed to process file. Please try again.")

    return CurriculumResponse(
        sections=[SectionModel.from_section(s) for s in sections],
        overall_topic=overall_topic,
    )
