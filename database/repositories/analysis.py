import logging
import threading
from decimal import Decimal
from typing import Any, Dict, List, Optional, Protocol

from core.exceptions import InvalidStatusTransition
from core.utils import round_half_up
from database.models import AnalysisRecord, AnalysisStatus

logger = logging.getLogger(__name__)


class AnalysisRepository(Protocol):
    """Storage boundary for analysis records."""

    async def save(self, record: AnalysisRecord) -> None:
        ...

    async def get(self, record_id: str) -> Optional[AnalysisRecord]:
        ...


class InMemoryAnalysisRepository:
    """Process-local store of analysis record snapshots.

    Every save stores a copy, so later changes to the caller's record are not
    visible until saved again. A save that would move a stored record back to
    an earlier status is rejected.
    """

    def __init__(self):
        self._records: Dict[str, AnalysisRecord] = {}
        self._lock = threading.Lock()

    async def save(self, record: AnalysisRecord) -> None:
        snapshot = record.snapshot()
        with self._lock:
            existing = self._records.get(record.id)
            if existing is not None and snapshot.status.rank < existing.status.rank:
                raise InvalidStatusTransition(
                    f"Analysis {record.id}: stored status {existing.status.value} "
                    f"cannot be overwritten with {snapshot.status.value}"
                )
            if existing is not None and existing.is_terminal and snapshot.status is not existing.status:
                raise InvalidStatusTransition(
                    f"Analysis {record.id} is already {existing.status.value}"
                )
            self._records[record.id] = snapshot
        logger.debug(f"Saved analysis {record.id} ({snapshot.status.value})")

    async def get(self, record_id: str) -> Optional[AnalysisRecord]:
        with self._lock:
            record = self._records.get(record_id)
        return record.snapshot() if record else None

    def _select(self, predicate) -> List[AnalysisRecord]:
        with self._lock:
            matches = [r for r in self._records.values() if predicate(r)]
        matches.sort(key=lambda r: r.created_at, reverse=True)
        return [r.snapshot() for r in matches]

    async def list_for_document(self, document_ref: str) -> List[AnalysisRecord]:
        """All analyses of a document, newest first."""
        return self._select(lambda r: r.document_ref == document_ref)

    async def get_recent(self, limit: int = 10) -> List[AnalysisRecord]:
        return self._select(lambda r: True)[:limit]

    async def get_by_type(self, analysis_type: str) -> List[AnalysisRecord]:
        return self._select(lambda r: r.analysis_type == analysis_type)

    async def get_stats(self) -> Dict[str, Dict[str, Any]]:
        """Count and average processing time (ms) per status."""
        with self._lock:
            records = list(self._records.values())

        stats: Dict[str, Dict[str, Any]] = {}
        for status in AnalysisStatus:
            group = [r for r in records if r.status is status]
            if not group:
                continue
            times = [r.processing_time for r in group if r.processing_time is not None]
            stats[status.value] = {
                'count': len(group),
                'avgProcessingTime': round_half_up(Decimal(sum(times)) / len(times), 1) if times else None,
            }
        return stats
