#!/usr/bin/env python3
"""
Analysis Record - One requested analysis of one uploaded resume.

Lifecycle:
    pending -> processing -> completed | failed

Terminal records are never moved again; a retry is a new record created with
new_attempt().
"""
import copy
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from core.exceptions import InvalidStatusTransition


class AnalysisStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (AnalysisStatus.COMPLETED, AnalysisStatus.FAILED)

    @property
    def rank(self) -> int:
        return 0 if self is AnalysisStatus.PENDING else 1 if self is AnalysisStatus.PROCESSING else 2


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _default_metadata() -> Dict[str, Any]:
    return {'version': '1.0.0', 'algorithm': 'rule_based', 'confidence': None}


@dataclass
class AnalysisRecord:
    """
    State of a single analysis run.

    Attributes:
        document_ref: Identity of the analysed document
        analysis_type: Requested analysis, stored as given
        parameters: Free-form options passed through to the scorers
        results: Scoring result, set only on completion
        error: Human-readable failure reason, set only on failure
        processing_time: Milliseconds between start and terminal transition
        metadata: {version, algorithm, confidence}
    """
    document_ref: str
    analysis_type: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: AnalysisStatus = AnalysisStatus.PENDING
    results: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    processing_time: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=_default_metadata)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def _require(self, expected: AnalysisStatus, target: AnalysisStatus) -> None:
        if self.status is not expected:
            raise InvalidStatusTransition(
                f"Analysis {self.id}: cannot move from {self.status.value} to {target.value}"
            )

    def start_processing(self, now: Optional[datetime] = None) -> None:
        self._require(AnalysisStatus.PENDING, AnalysisStatus.PROCESSING)
        self.status = AnalysisStatus.PROCESSING
        self.started_at = now or _utcnow()

    def _finish(self, status: AnalysisStatus, now: Optional[datetime]) -> None:
        self._require(AnalysisStatus.PROCESSING, status)
        self.status = status
        self.completed_at = now or _utcnow()
        elapsed = self.completed_at - self.started_at
        self.processing_time = max(0, int(elapsed.total_seconds() * 1000))

    def complete(
        self,
        results: Dict[str, Any],
        confidence: Optional[float] = None,
        now: Optional[datetime] = None
    ) -> None:
        """processing -> completed, attaching the results."""
        self._finish(AnalysisStatus.COMPLETED, now)
        self.results = results
        self.error = None
        if confidence is not None:
            self.metadata['confidence'] = confidence

    def fail(self, error: str, now: Optional[datetime] = None) -> None:
        """processing -> failed, attaching the error message."""
        self._finish(AnalysisStatus.FAILED, now)
        self.error = error
        self.results = None

    def new_attempt(self) -> 'AnalysisRecord':
        """Fresh pending record for the same document, type and parameters."""
        if not self.is_terminal:
            raise InvalidStatusTransition(
                f"Analysis {self.id} is still {self.status.value}; only finished analyses can be retried"
            )
        return AnalysisRecord(
            document_ref=self.document_ref,
            analysis_type=self.analysis_type,
            parameters=copy.deepcopy(self.parameters),
            metadata={**_default_metadata(), 'version': self.metadata.get('version', '1.0.0'),
                      'algorithm': self.metadata.get('algorithm', 'rule_based')},
        )

    def snapshot(self) -> 'AnalysisRecord':
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        def iso(value: Optional[datetime]) -> Optional[str]:
            return value.isoformat() if value else None

        data = {
            'id': self.id,
            'documentRef': self.document_ref,
            'analysisType': self.analysis_type,
            'parameters': self.parameters,
            'status': self.status.value,
            'results': self.results,
            'error': self.error,
            'createdAt': iso(self.created_at),
            'startedAt': iso(self.started_at),
            'completedAt': iso(self.completed_at),
            'processingTime': self.processing_time,
            'metadata': self.metadata,
        }
        return {key: value for key, value in data.items() if value is not None}
