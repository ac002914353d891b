"""Tests for the MCP tool handlers."""

from pathlib import Path

import pytest

from spec_quality.exceptions import AnalysisNotFoundError, SpecDecodeError, UnsupportedFormatError
from spec_quality.server import (
    spec_analyze_file,
    spec_analyze_text,
    spec_get_analysis,
    spec_list_analyses,
)


@pytest.mark.asyncio
async def test_analyze_file(database, openapi_yaml_file: Path) -> None:
    result = await spec_analyze_file(str(openapi_yaml_file))

    report = result["report"]
    assert report["fileName"] == "openapi.yaml"
    assert report["specVersion"] == "OpenAPI 3.0.0"
    assert set(report["scores"]) == {"documentation", "syntax", "bestPractices", "security", "usability"}
    assert "openapi.yaml (OpenAPI 3.0.0) scored" in result["summary"]

    example_findings = report["scores"]["bestPractices"]["findings"]
    assert {"severity": "info", "message": "Response 200 for GET /widgets does not have examples",
            "path": ["paths", "/widgets", "get", "responses", "200"]} in example_findings

    stored = await spec_get_analysis(result["analysis_id"])
    assert stored["result"] == report


@pytest.mark.asyncio
async def test_analyze_jar_file(database, tmp_path: Path, jar_bytes: bytes) -> None:
    jar = tmp_path / "service.jar"
    jar.write_bytes(jar_bytes)

    result = await spec_analyze_file(str(jar))
    assert result["report"]["fileName"] == "BOOT-INF/classes/api-docs/orders.json"
    assert len(result["extracted_specs"]) == 2


@pytest.mark.asyncio
async def test_analyze_text(database) -> None:
    result = await spec_analyze_text('{"swagger": "2.0", "info": {"title": "X"}}', file_name="x.json")
    scores = result["report"]["scores"]
    assert scores["syntax"]["score"] == pytest.approx(0.6)
    assert scores["documentation"]["score"] == pytest.approx(0.1)


@pytest.mark.asyncio
async def test_analyze_text_errors(database) -> None:
    with pytest.raises(SpecDecodeError):
        await spec_analyze_text("{broken", file_name="x.json")
    with pytest.raises(UnsupportedFormatError):
        await spec_analyze_text("swagger: '2.0'", file_name="x.txt")
    assert (await spec_list_analyses())["count"] == 0


@pytest.mark.asyncio
async def test_get_unknown_analysis(database) -> None:
    with pytest.raises(AnalysisNotFoundError):
        await spec_get_analysis("missing")


@pytest.mark.asyncio
async def test_list_analyses(database) -> None:
    empty = await spec_list_analyses()
    assert empty["summary"] == "No analyses stored yet."

    await spec_analyze_text("openapi: 3.0.0\n", file_name="a.yaml")
    listing = await spec_list_analyses(limit=5)
    assert listing["count"] == 1
    assert listing["analyses"][0]["fileName"] == "a.yaml"
