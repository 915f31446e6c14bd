"""Analysis pipeline runner module.

This module sequences one analysis run: text extraction, structured
extraction, scoring and the status transitions of the analysis record.
It can be used by main.py or embedded in a service.
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from core.config_loader import AppConfig, get_default_config
from core.exceptions import InvalidStatusTransition
from core.scorer import check_analysis_type, score_dimension
from database.models import AnalysisRecord
from database.repositories import AnalysisRepository, InMemoryAnalysisRepository
from etl.resume import RawDocument, extract_structured, extract_text_async
from pipeline.control import AdmissionController


logger = logging.getLogger(__name__)


class AnalysisRunner:
    """Drives analysis records from pending to a terminal status.

    Extraction and scoring failures end as failed records and are never
    raised. Admission rejections and misuse of the record lifecycle are
    raised to the caller.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        repository: Optional[AnalysisRepository] = None,
        admission: Optional[AdmissionController] = None
    ):
        self.config = config or get_default_config()
        self.repository = repository if repository is not None else InMemoryAnalysisRepository()
        self.admission = admission or AdmissionController(enabled=self.config.analysis.admission_control)

    async def process(self, record: AnalysisRecord, document: RawDocument) -> AnalysisRecord:
        """Run one analysis to completion.

        Storage errors while saving the processing status fail the record.
        The terminal save is attempted once and only logged on error.

        Args:
            record: Pending analysis record, updated in place
            document: Document to analyse

        Returns:
            The same record, now completed or failed

        Raises:
            AnalysisInFlightError: If the same analysis of the document is
                already running; the record stays pending
            InvalidStatusTransition: If the record is not pending
        """
        with self.admission.admit(document.identity, record.analysis_type, {'analysis_id': record.id}):
            record.start_processing()
            record.metadata['version'] = self.config.analysis.version
            record.metadata['algorithm'] = self.config.analysis.algorithm

            try:
                await self.repository.save(record)
                logger.info(f"Analysis {record.id} started ({record.analysis_type})")

                check_analysis_type(record.analysis_type)
                text = await extract_text_async(document, self.config.extraction)
                resume = extract_structured(text)
                score = score_dimension(
                    record.analysis_type, resume, record.parameters, self.config.scorer
                )
                results: Dict[str, Any] = score.to_dict()
                results['extractedData'] = resume.to_dict()
            except InvalidStatusTransition:
                raise
            except Exception as e:
                error = str(e) or type(e).__name__
                logger.error(f"Analysis {record.id} failed: {error}")
                record.fail(error)
            else:
                record.complete(results, confidence=resume.section_coverage())
                logger.info(
                    f"Analysis {record.id} completed: score {results['score']} "
                    f"in {record.processing_time}ms"
                )

            try:
                await self.repository.save(record)
            except InvalidStatusTransition:
                raise
            except Exception as e:
                # The returned record still carries the terminal status
                logger.error(f"Could not persist analysis {record.id} ({record.status.value}): {e}")
        return record

    async def process_many(
        self,
        items: Iterable[Tuple[AnalysisRecord, RawDocument]]
    ) -> List[Union[AnalysisRecord, BaseException]]:
        """Run several analyses concurrently.

        Returns one entry per item, in order: the finished record, or the
        exception that kept it from running (e.g. AnalysisInFlightError).
        """
        return await asyncio.gather(
            *(self.process(record, document) for record, document in items),
            return_exceptions=True
        )


def run_analysis(
    document: RawDocument,
    analysis_type: str = 'overall',
    parameters: Optional[Dict[str, Any]] = None,
    config: Optional[AppConfig] = None
) -> AnalysisRecord:
    """Create a record for the document and run it as a self-contained operation."""
    record = AnalysisRecord(
        document_ref=document.identity,
        analysis_type=analysis_type,
        parameters=dict(parameters or {}),
    )
    runner = AnalysisRunner(config)
    return asyncio.run(runner.process(record, document))
