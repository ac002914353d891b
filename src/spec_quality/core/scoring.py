"""Weighted quality scoring for OpenAPI / Swagger documents.

Each category has a pair of plain functions: one computes the score, the other
lists the findings. Both walk the document through the shared iterators in
`document.py`, so findings always come out in document order (path, method,
response code). `analyze_spec` runs all five categories and combines them
using the fixed weights in `CATEGORY_WEIGHTS`.

Nothing here performs I/O or keeps state between calls.
"""

from __future__ import annotations

import logging
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, NamedTuple

from .document import (
    as_list,
    as_mapping,
    has,
    is_set,
    iter_all_responses,
    iter_operations,
    iter_responses,
    lookup,
)
from .models import (
    CATEGORY_WEIGHTS,
    AnalysisReport,
    Category,
    CategoryScore,
    CategoryScores,
    Finding,
    Severity,
    SpecFlavor,
    SpecVersion,
)

logger = logging.getLogger(__name__)

OPENAPI3_VERSION = re.compile(r"^3\.\d+\.\d+$")
SWAGGER2_VERSION = "2.0"

OVERALL_PRECISION = Decimal("0.01")


def _clamp(score: float) -> float:
    return max(0.0, min(1.0, score))


# ─── Version Resolver ────────────────────────────────────────────────────────


def resolve_version(doc: dict) -> SpecVersion:
    """Label the document as Swagger or OpenAPI and pick its flavor.

    No validation happens here; malformed versions are penalized by the
    syntax category.
    """
    swagger = lookup(doc, "swagger")
    openapi = lookup(doc, "openapi")

    if is_set(swagger):
        label = f"Swagger {swagger}"
    else:
        label = f"OpenAPI {openapi if is_set(openapi) else 'unknown'}"

    flavor = SpecFlavor.OPENAPI_3 if is_set(openapi) else SpecFlavor.SWAGGER_2
    return SpecVersion(label=label, flavor=flavor)


# ─── Documentation ───────────────────────────────────────────────────────────


def score_documentation(doc: dict, version: SpecVersion) -> float:
    """Presence of descriptive metadata on the API and on each operation."""
    score = 0.0
    if has(doc, "info", "title"):
        score += 0.1
    if has(doc, "info", "description"):
        score += 0.1
    if has(doc, "info", "version"):
        score += 0.1

    total = described = with_id = with_responses = with_params = 0
    for op in iter_operations(doc):
        total += 1
        if is_set(op.get("description")) or is_set(op.get("summary")):
            described += 1
        if is_set(op.get("operationId")):
            with_id += 1
        if as_mapping(op.get("responses")):
            with_responses += 1
        if as_list(op.get("parameters")):
            with_params += 1

    if total:
        score += (described / total) * 0.2
        score += (with_id / total) * 0.1
        score += (with_responses / total) * 0.2
        score += (with_params / total) * 0.2

    return _clamp(score)


def documentation_findings(doc: dict, version: SpecVersion) -> list[Finding]:
    """Missing API title and description, then per-operation description and operationId gaps."""
    findings = []
    if not has(doc, "info", "title"):
        findings.append(Finding(
            severity=Severity.ERROR,
            message="API title is missing",
            path=("info", "title"),
        ))
    if not has(doc, "info", "description"):
        findings.append(Finding(
            severity=Severity.WARNING,
            message="API description is missing",
            path=("info", "description"),
        ))

    for op in iter_operations(doc):
        if not is_set(op.get("description")) and not is_set(op.get("summary")):
            findings.append(Finding(
                severity=Severity.WARNING,
                message=f"Operation {op.label} is missing a description",
                path=("paths", op.path, op.method, "description"),
            ))
        if not is_set(op.get("operationId")):
            findings.append(Finding(
                severity=Severity.WARNING,
                message=f"Operation {op.label} is missing an operationId",
                path=("paths", op.path, op.method, "operationId"),
            ))
    return findings


# ─── Syntax ──────────────────────────────────────────────────────────────────


def score_syntax(doc: dict, version: SpecVersion) -> float:
    """Crude structural conformance. Not a schema validation."""
    score = 0.8
    if not has(doc, "paths"):
        score -= 0.2
    if not has(doc, "info"):
        score -= 0.2
    elif not has(doc, "info", "title"):
        score -= 0.1

    swagger = lookup(doc, "swagger")
    if is_set(swagger) and swagger != SWAGGER2_VERSION:
        score -= 0.2

    openapi = lookup(doc, "openapi")
    if is_set(openapi) and not (isinstance(openapi, str) and OPENAPI3_VERSION.match(openapi)):
        score -= 0.2

    return _clamp(score)


def syntax_findings(doc: dict, version: SpecVersion) -> list[Finding]:
    # Title and version penalties intentionally have no matching finding.
    findings = []
    if not has(doc, "paths"):
        findings.append(Finding(severity=Severity.ERROR, message="API paths are missing", path=("paths",)))
    if not has(doc, "info"):
        findings.append(Finding(severity=Severity.ERROR, message="API info object is missing", path=("info",)))
    return findings


# ─── Best Practices ──────────────────────────────────────────────────────────

EXAMPLE_EXPECTED_CODES = ("200", "201")


def _has_example(response: dict) -> bool:
    return is_set(response.get("examples")) or is_set(response.get("example"))


def score_best_practices(doc: dict, version: SpecVersion) -> float:
    """Tags and response examples, plus flat credit for naming and pagination."""
    score = 0.0
    if as_list(lookup(doc, "tags")):
        score += 0.2

    # Naming consistency is not inspected yet; flat credit.
    score += 0.3

    if any(_has_example(response) for _, _, response in iter_all_responses(doc)):
        score += 0.3

    # Pagination patterns are not inspected yet; flat credit.
    score += 0.2

    return _clamp(score)


def best_practices_findings(doc: dict, version: SpecVersion) -> list[Finding]:
    """Missing tags, and 200/201 responses without examples."""
    findings = []
    if not as_list(lookup(doc, "tags")):
        findings.append(Finding(
            severity=Severity.WARNING,
            message="API does not define tags for organizing operations",
            path=("tags",),
        ))

    for op, code, response in iter_all_responses(doc):
        if code in EXAMPLE_EXPECTED_CODES and not _has_example(response):
            findings.append(Finding(
                severity=Severity.INFO,
                message=f"Response {code} for {op.label} does not have examples",
                path=("paths", op.path, op.method, "responses", code),
            ))
    return findings


# ─── Security ────────────────────────────────────────────────────────────────


def _has_security_scheme(doc: dict) -> bool:
    return has(doc, "securityDefinitions") or has(doc, "components", "securitySchemes")


def enforces_https(doc: dict) -> bool:
    """Servers decide for v3 documents; `host` + `schemes` for v2 ones."""
    servers = as_list(lookup(doc, "servers"))
    if servers:
        for server in servers:
            url = lookup(server, "url")
            if isinstance(url, str) and url.startswith("https://"):
                return True
        return False
    if has(doc, "host"):
        return "https" in as_list(lookup(doc, "schemes"))
    return False


def score_security(doc: dict, version: SpecVersion) -> float:
    """Security schemes, root security requirements, and HTTPS."""
    score = 0.0
    if _has_security_scheme(doc):
        score += 0.5
    if as_list(lookup(doc, "security")):
        score += 0.3
    if enforces_https(doc):
        score += 0.2
    return _clamp(score)


def security_findings(doc: dict, version: SpecVersion) -> list[Finding]:
    """Missing schemes and plain-HTTP servers, located by the flavor's key."""
    findings = []
    if not _has_security_scheme(doc):
        findings.append(Finding(
            severity=Severity.WARNING,
            message="API does not define any security schemes",
            path=("components", "securitySchemes") if version.is_openapi3 else ("securityDefinitions",),
        ))
    if not enforces_https(doc):
        findings.append(Finding(
            severity=Severity.WARNING,
            message="API does not enforce HTTPS",
            path=("servers",) if version.is_openapi3 else ("schemes",),
        ))
    return findings


# ─── Usability ───────────────────────────────────────────────────────────────


def _is_error_code(code: str) -> bool:
    return code.startswith("4") or code.startswith("5")


def score_usability(doc: dict, version: SpecVersion) -> float:
    """Described error responses, plus flat credit for consistency."""
    # Response consistency is not inspected yet; flat credit.
    score = 0.3

    if any(
        _is_error_code(code) and is_set(response.get("description"))
        for _, code, response in iter_all_responses(doc)
    ):
        score += 0.3

    # Naming consistency is not inspected yet; flat credit.
    score += 0.4

    return _clamp(score)


def usability_findings(doc: dict, version: SpecVersion) -> list[Finding]:
    """Operations whose responses declare no 4xx code."""
    findings = []
    for op in iter_operations(doc):
        if not isinstance(op.get("responses"), dict):
            continue
        if not any(code.startswith("4") for code, _ in iter_responses(op)):
            findings.append(Finding(
                severity=Severity.INFO,
                message=f"Operation {op.label} does not define any 4xx error responses",
                path=("paths", op.path, op.method, "responses"),
            ))
    return findings


# ─── Report Assembly ─────────────────────────────────────────────────────────


class CategoryHandler(NamedTuple):
    score: Callable[[dict, SpecVersion], float]
    findings: Callable[[dict, SpecVersion], list[Finding]]


CATEGORY_HANDLERS: dict[Category, CategoryHandler] = {
    Category.DOCUMENTATION: CategoryHandler(score_documentation, documentation_findings),
    Category.SYNTAX: CategoryHandler(score_syntax, syntax_findings),
    Category.BEST_PRACTICES: CategoryHandler(score_best_practices, best_practices_findings),
    Category.SECURITY: CategoryHandler(score_security, security_findings),
    Category.USABILITY: CategoryHandler(score_usability, usability_findings),
}


def score_category(category: Category, doc: dict, version: SpecVersion) -> CategoryScore:
    """Run one category handler and attach its fixed weight."""
    handler = CATEGORY_HANDLERS[category]
    return CategoryScore(
        score=handler.score(doc, version),
        weight=CATEGORY_WEIGHTS[category],
        findings=handler.findings(doc, version),
    )


def compute_overall_score(scores: CategoryScores) -> float:
    """Weighted sum of the five category scores, rounded half up to 2 decimals."""
    total = sum(cat.score * cat.weight for _, cat in scores.items())
    return float(Decimal(repr(total)).quantize(OVERALL_PRECISION, rounding=ROUND_HALF_UP))


def analyze_spec(spec: Any, file_name: str) -> AnalysisReport:
    """Score a decoded OpenAPI / Swagger document.

    `spec` is whatever the JSON or YAML decoder produced. Anything that is not a
    mapping is scored as an empty document; missing or wrong-typed keys only
    lower the scores and add findings, they never raise.
    """
    doc = spec if isinstance(spec, dict) else {}
    version = resolve_version(doc)

    scores = CategoryScores(
        documentation=score_category(Category.DOCUMENTATION, doc, version),
        syntax=score_category(Category.SYNTAX, doc, version),
        best_practices=score_category(Category.BEST_PRACTICES, doc, version),
        security=score_category(Category.SECURITY, doc, version),
        usability=score_category(Category.USABILITY, doc, version),
    )
    overall = compute_overall_score(scores)

    logger.debug("Scored %s (%s): overall %.2f", file_name, version.label, overall)

    return AnalysisReport(
        file_name=file_name,
        spec_version=version.label,
        scores=scores,
        overall_score=overall,
    )
