"""Spec Quality MCP Server.

FastMCP server that scores OpenAPI / Swagger documents and keeps their history.
Run: spec-quality-mcp
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .core.models import AnalysisReport, Severity
from .core.scoring import analyze_spec
from .db import close_db, init_db
from .loader import Upload, decode_spec, load_spec_file, read_upload
from .store import get_analysis, list_analyses, save_analysis

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=False)
WRITES_HISTORY = ToolAnnotations(readOnlyHint=False, destructiveHint=False, idempotentHint=False, openWorldHint=False)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Configure logging and open the analysis store for the server's lifetime."""
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    await init_db()
    try:
        yield
    finally:
        await close_db()


mcp = FastMCP(
    "Spec Quality",
    instructions="Score OpenAPI and Swagger specifications for documentation, syntax, best practices, security, and usability. Every analysis is stored and can be retrieved by id.",
    lifespan=lifespan,
)


def _report_summary(report: AnalysisReport) -> str:
    weakest, weakest_score = min(report.scores.items(), key=lambda item: item[1].score)
    return (
        f"{report.file_name} ({report.spec_version}) scored {report.overall_score:.0%} overall. "
        f"{report.count(Severity.ERROR)} error(s), {report.count(Severity.WARNING)} warning(s), "
        f"{report.count(Severity.INFO)} suggestion(s). "
        f"Weakest category: {weakest.value} at {weakest_score.score:.0%}."
    )


async def _analyze_upload(upload: Upload) -> dict:
    spec = decode_spec(upload.primary)
    report = analyze_spec(spec, upload.primary.name)
    analysis_id = await save_analysis(report, spec, upload)
    return {
        "analysis_id": analysis_id,
        "report": report.to_dict(),
        "extracted_specs": [s.name for s in upload.extracted],
        "summary": _report_summary(report),
    }


# ─── Tool 1: Analyze a file ──────────────────────────────────────────────────


@mcp.tool(annotations=WRITES_HISTORY)
async def spec_analyze_file(path: str) -> dict:
    """Score an OpenAPI / Swagger file on disk and store the result.

    Args:
        path: Path to a .json, .yaml, .yml spec, or a .jar bundling specs under api-docs/.
    """
    upload = load_spec_file(Path(path).expanduser())
    return await _analyze_upload(upload)


# ─── Tool 2: Analyze inline text ─────────────────────────────────────────────


@mcp.tool(annotations=WRITES_HISTORY)
async def spec_analyze_text(content: str, file_name: str = "openapi.yaml") -> dict:
    """Score OpenAPI / Swagger text pasted directly and store the result.

    Args:
        content: The specification as JSON or YAML text.
        file_name: Name to report under; its extension picks the parser. Default 'openapi.yaml'.
    """
    upload = read_upload(file_name, content.encode("utf-8"))
    return await _analyze_upload(upload)


# ─── Tool 3: Stored analysis ─────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def spec_get_analysis(analysis_id: str) -> dict:
    """Fetch a previously stored analysis, including the spec it scored.

    Args:
        analysis_id: Id returned by spec_analyze_file or spec_analyze_text.
    """
    return await get_analysis(analysis_id)


# ─── Tool 4: History ─────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def spec_list_analyses(limit: int = 20) -> dict:
    """Recent analyses, newest first.

    Args:
        limit: Maximum number of analyses to return. Default 20.
    """
    analyses = await list_analyses(limit)
    return {
        "analyses": analyses,
        "count": len(analyses),
        "summary": f"{len(analyses)} stored analysis(es)." if analyses else "No analyses stored yet.",
    }


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
