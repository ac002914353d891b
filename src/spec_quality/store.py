"""Persist and retrieve analyses by id.

Reports are stored in their serialized camelCase form, so what `get_analysis`
returns is exactly what the scorer produced, plus the spec it was computed from.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select

from .core.models import AnalysisReport
from .db import get_session_factory
from .exceptions import AnalysisNotFoundError
from .loader import Upload
from .sqlmodels import AnalysisRecord

logger = logging.getLogger(__name__)


async def save_analysis(report: AnalysisReport, spec: dict, upload: Upload) -> str:
    """Store a report with its spec and source text. Returns the new analysis id."""
    analysis_id = str(uuid.uuid4())
    session_factory = get_session_factory()

    async with session_factory() as session:
        session.add(AnalysisRecord(
            id=analysis_id,
            file_name=report.file_name,
            spec_version=report.spec_version,
            overall_score=report.overall_score,
            report_json=json.dumps(report.to_dict()),
            spec_json=json.dumps(spec, default=str),
            source_name=upload.primary.name,
            source_format=upload.primary.format,
            source_content=upload.primary.content,
            extracted_names="\n".join(s.name for s in upload.extracted),
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
        ))
        await session.commit()

    logger.info("Stored analysis %s for %s (overall %.2f)", analysis_id, report.file_name, report.overall_score)
    return analysis_id


async def get_analysis(analysis_id: str) -> dict:
    """Fetch a stored analysis.

    Raises:
        AnalysisNotFoundError: If no analysis has this id.
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        record = await session.get(AnalysisRecord, analysis_id)

    if record is None:
        raise AnalysisNotFoundError(analysis_id)

    return {
        "analysisId": record.id,
        "result": json.loads(record.report_json),
        "spec": json.loads(record.spec_json),
        "originalSpec": {
            "name": record.source_name,
            "format": record.source_format,
            "content": record.source_content,
        },
        "extractedSpecs": record.extracted_names.split("\n") if record.extracted_names else [],
        "createdAt": record.created_at.isoformat(),
    }


async def list_analyses(limit: int = 20) -> list[dict]:
    """Most recent analyses first, without report bodies."""
    session_factory = get_session_factory()
    async with session_factory() as session:
        result = await session.execute(
            select(AnalysisRecord)
            .order_by(AnalysisRecord.created_at.desc())
            .limit(limit)
        )
        rows = result.scalars().all()

    return [
        {
            "analysisId": r.id,
            "fileName": r.file_name,
            "specVersion": r.spec_version,
            "overallScore": r.overall_score,
            "createdAt": r.created_at.isoformat(),
        }
        for r in rows
    ]
