"""Spec Quality MCP Server.

Score OpenAPI and Swagger documents for documentation, syntax, best practices,
security, and usability, and keep a history of past analyses.
"""

__version__ = "0.1.0"

from .core.models import AnalysisReport, Category, CategoryScore, Finding, Severity
from .core.scoring import analyze_spec, resolve_version

__all__ = [
    "analyze_spec",
    "resolve_version",
    "AnalysisReport",
    "Category",
    "CategoryScore",
    "Finding",
    "Severity",
]
