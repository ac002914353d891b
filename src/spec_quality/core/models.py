"""Pydantic data models — the shared report objects.

The scorer, the store, and the MCP tools all exchange these models.
Serialized reports use camelCase keys (`fileName`, `bestPractices`, ...)
so stored analyses keep the same shape regardless of which layer wrote them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """How serious a finding is."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Category(str, Enum):
    """Quality category a score belongs to."""

    DOCUMENTATION = "documentation"
    SYNTAX = "syntax"
    BEST_PRACTICES = "bestPractices"
    SECURITY = "security"
    USABILITY = "usability"


# Fixed partition of the overall score. Sums to 1.0.
CATEGORY_WEIGHTS: dict[Category, float] = {
    Category.DOCUMENTATION: 0.30,
    Category.SYNTAX: 0.20,
    Category.BEST_PRACTICES: 0.25,
    Category.SECURITY: 0.15,
    Category.USABILITY: 0.10,
}


class SpecFlavor(str, Enum):
    """Which family of specification a document belongs to."""

    SWAGGER_2 = "swagger2"
    OPENAPI_3 = "openapi3"


class SpecVersion(BaseModel):
    """Display label plus the v2/v3 flavor used for version-specific hints."""

    model_config = ConfigDict(frozen=True)

    label: str
    flavor: SpecFlavor

    @property
    def is_openapi3(self) -> bool:
        return self.flavor is SpecFlavor.OPENAPI_3


class Finding(BaseModel):
    """A single reported issue, located by its path inside the document."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str
    path: tuple[str, ...] = Field(default=(), description="Key segments from the document root")


class CategoryScore(BaseModel):
    """Score for one category together with the findings that explain it."""

    score: float = Field(ge=0.0, le=1.0)
    weight: float = Field(ge=0.0, le=1.0)
    findings: list[Finding] = Field(default_factory=list)

    @property
    def weighted(self) -> float:
        return self.score * self.weight


class CategoryScores(BaseModel):
    """All five category scores. Every key is always present."""

    model_config = ConfigDict(populate_by_name=True)

    documentation: CategoryScore
    syntax: CategoryScore
    best_practices: CategoryScore = Field(alias="bestPractices")
    security: CategoryScore
    usability: CategoryScore

    def get(self, category: Category) -> CategoryScore:
        return {
            Category.DOCUMENTATION: self.documentation,
            Category.SYNTAX: self.syntax,
            Category.BEST_PRACTICES: self.best_practices,
            Category.SECURITY: self.security,
            Category.USABILITY: self.usability,
        }[category]

    def items(self) -> list[tuple[Category, CategoryScore]]:
        return [(category, self.get(category)) for category in Category]


class AnalysisReport(BaseModel):
    """Result of scoring one specification document."""

    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(alias="fileName")
    spec_version: str = Field(alias="specVersion")
    scores: CategoryScores
    overall_score: float = Field(ge=0.0, le=1.0, alias="overallScore")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def findings(self) -> list[Finding]:
        """Every finding across all categories, in category order."""
        return [f for _, cat in self.scores.items() for f in cat.findings]

    def count(self, severity: Severity) -> int:
        return sum(1 for f in self.findings if f.severity is severity)

    def to_dict(self) -> dict:
        """JSON-compatible dict using the camelCase report keys."""
        return self.model_dump(mode="json", by_alias=True)
