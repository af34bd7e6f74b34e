"""
CyberSecure Toolkit Data Models
================================

Pydantic v2 models shared by every tool: individual findings and the
:class:`ScanResult` envelope returned by each engine operation and
consumed by the console and report layers.

References:
    - OWASP Risk Rating Methodology.
      https://owasp.org/www-community/OWASP_Risk_Rating_Methodology
    - SARIF v2.1.0 Specification (OASIS, 2020).
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

import datetime as _dt
import json as _json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _utcnow() -> _dt.datetime:
    return _dt.datetime.now(_dt.timezone.utc)


class Severity(str, Enum):
    """Finding severity level, ordered from most to least severe.

    Aligned with CVSS v3.1 qualitative severity ratings.
    """

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFO = "INFO"

    @property
    def css_class(self) -> str:
        """CSS class name for severity-based styling in HTML reports."""
        return f"severity-{self.value.lower()}"


class Finding(BaseModel):
    """A single security observation produced by a tool.

    Attributes:
        severity:       Qualitative severity rating.
        title:          Short, descriptive title.
        description:    Human-readable explanation.
        evidence:       Supporting data; dicts and lists are stored as JSON.
        recommendation: Suggested remediation.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="ignore",
    )

    severity: Severity
    title: str = Field(..., min_length=1, max_length=256)
    description: str = Field(default="")
    evidence: str = Field(default="")
    recommendation: str = Field(default="")

    @field_validator("evidence", mode="before")
    @classmethod
    def _coerce_evidence(cls, v: Any) -> str:
        if isinstance(v, str):
            return v
        if isinstance(v, (dict, list)):
            return _json.dumps(v, ensure_ascii=False, default=str)
        return str(v)


class ScanResult(BaseModel):
    """Aggregated result of a single tool invocation.

    ``score`` and ``level`` carry the headline verdict of the tool
    (strength for passwords, risk for URLs and WiFi); ``metadata`` holds
    the tool-specific result model dumped to a dict.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    tool_name: str = Field(..., min_length=1)
    target: str = Field(..., min_length=1)
    start_time: _dt.datetime = Field(default_factory=_utcnow)
    end_time: Optional[_dt.datetime] = None
    score: Optional[int] = Field(default=None, ge=0, le=100)
    level: str = ""
    findings: list[Finding] = Field(default_factory=list)
    summary: str = ""
    simulated: bool = False
    rejected: bool = False
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def duration_seconds(self) -> float | None:
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    @property
    def severity_counts(self) -> dict[str, int]:
        """Count of findings per severity, e.g. ``{"HIGH": 2, ...}``."""
        counts: dict[str, int] = {s.value: 0 for s in Severity}
        for finding in self.findings:
            counts[finding.severity.value] += 1
        return counts

    @property
    def highest_severity(self) -> Severity | None:
        if not self.findings:
            return None
        order = list(Severity)
        return min((f.severity for f in self.findings), key=order.index)

    @property
    def finding_count(self) -> int:
        return len(self.findings)

    def add_finding(self, finding: Finding) -> None:
        self.findings.append(finding)

    def finalize(self, summary: str | None = None) -> ScanResult:
        """Stamp *end_time* and set *summary* (generated when ``None``).

        Returns:
            ``self`` for fluent chaining.
        """
        self.end_time = _utcnow()
        if summary is not None:
            self.summary = summary
        elif not self.summary:
            parts = [f"{sev}: {cnt}" for sev, cnt in self.severity_counts.items() if cnt]
            self.summary = (
                f"Findings: {len(self.findings)} "
                f"({', '.join(parts) if parts else 'none'})"
            )
        return self
