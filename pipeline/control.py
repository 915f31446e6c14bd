import os
import time
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple

from core.exceptions import AnalysisInFlightError

logger = logging.getLogger(__name__)

AdmissionKey = Tuple[str, str]


class AdmissionController:
    """
    Allows at most one in-flight analysis per (document identity, analysis type).

    Different documents, or different analysis types of the same document,
    run concurrently. Holders are tracked in memory for this process only.
    """
    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._holders: Dict[AdmissionKey, Dict] = {}
        self._lock = threading.Lock()

    def acquire(self, document_ref: str, analysis_type: str, metadata: Optional[Dict] = None) -> bool:
        """
        Attempt to admit an analysis run.

        Args:
            document_ref: Identity of the analysed document
            analysis_type: Requested analysis type
            metadata: Additional info to keep about the holder (e.g., record id)

        Returns:
            True if admitted, False if the same analysis is already running.
        """
        if not self.enabled:
            return True

        key = (document_ref, analysis_type)
        with self._lock:
            if key in self._holders:
                return False
            self._holders[key] = {
                "pid": os.getpid(),
                "thread": threading.get_ident(),
                "timestamp": time.time(),
                **(metadata or {})
            }
        return True

    def release(self, document_ref: str, analysis_type: str) -> None:
        if not self.enabled:
            return
        with self._lock:
            if self._holders.pop((document_ref, analysis_type), None) is None:
                logger.warning(f"Released admission that was not held: {document_ref} ({analysis_type})")

    def get_holder_info(self, document_ref: str, analysis_type: str) -> Optional[Dict]:
        """Information about the current holder, or None if nothing is running."""
        with self._lock:
            info = self._holders.get((document_ref, analysis_type))
            return dict(info) if info else None

    def in_flight(self) -> int:
        with self._lock:
            return len(self._holders)

    @contextmanager
    def admit(self, document_ref: str, analysis_type: str, metadata: Optional[Dict] = None) -> Iterator[None]:
        """
        Hold admission for the duration of the block.

        Raises:
            AnalysisInFlightError: If the same analysis is already running
        """
        if not self.acquire(document_ref, analysis_type, metadata):
            holder = self.get_holder_info(document_ref, analysis_type) or {}
            raise AnalysisInFlightError(
                f"A {analysis_type} analysis of {document_ref} is already in progress"
                + (f" (analysis {holder['analysis_id']})" if 'analysis_id' in holder else "")
            )
        try:
            yield
        finally:
            self.release(document_ref, analysis_type)
