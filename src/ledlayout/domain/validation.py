"""Result types for free-hand path edit validation."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class RejectReason(str, Enum):
    """Why a path edit was flagged."""

    SELF_INTERSECTION = "self_intersection"
    CURVATURE_SPIKE = "curvature_spike"
    BBOX_ESCAPE = "bbox_escape"
    DEGENERATE_SEGMENT = "degenerate_segment"


class Severity(str, Enum):
    """Validation outcome severity. Only ERROR blocks an edit."""

    OK = "ok"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class PathMetrics:
    """Diagnostic measurements gathered while validating an edit.

    Attributes:
        candidate_length: Total sampled length of the candidate outline
        previous_length: Total sampled length of the matching previous contours
        max_segment: Longest sampled segment of the candidate
        previous_median_segment: Largest per-contour median segment of the previous outline
        contour_count: Number of contours in the candidate
    """

    candidate_length: float | None = None
    previous_length: float | None = None
    max_segment: float | None = None
    previous_median_segment: float | None = None
    contour_count: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass(frozen=True)
class PathEditValidationResult:
    """Gate decision for a proposed outline edit.

    Attributes:
        ok: False only when severity is ERROR
        severity: OK, WARN (surface to the user) or ERROR (reject)
        reason: First failing check, None when nothing was flagged
        metrics: Diagnostics for observability
    """

    ok: bool
    severity: Severity
    reason: RejectReason | None = None
    metrics: PathMetrics | None = None

    @classmethod
    def of(
        cls,
        severity: Severity,
        reason: RejectReason | None = None,
        metrics: PathMetrics | None = None,
    ) -> "PathEditValidationResult":
        """Build a result, deriving ``ok`` from the severity."""
        return cls(ok=severity != Severity.ERROR, severity=severity, reason=reason, metrics=metrics)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"ok": self.ok, "severity": self.severity.value}
        if self.reason is not None:
            data["reason"] = self.reason.value
        if self.metrics is not None:
            data["metrics"] = self.metrics.to_dict()
        return data
