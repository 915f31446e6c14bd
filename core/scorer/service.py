#!/usr/bin/env python3
"""
Scoring Service - Dispatch an analysis type to its dimension scorer.

Scorers are pure: no I/O, no clock, no randomness. The same resume and
parameters always produce an equal DimensionScore.
"""

from typing import Any, Callable, Dict, Optional
import logging

from core.config_loader import ScorerConfig
from core.exceptions import UnknownAnalysisType
from core.scorer.education import score_education
from core.scorer.experience import score_experience
from core.scorer.models import DimensionScore
from core.scorer.overall import score_overall
from core.scorer.skills import score_skills
from etl.resume.models import StructuredResume

logger = logging.getLogger(__name__)

Scorer = Callable[[StructuredResume, Optional[Dict[str, Any]]], DimensionScore]

SCORERS: Dict[str, Scorer] = {
    'skills': score_skills,
    'experience': score_experience,
    'education': score_education,
    'overall': score_overall,
}


def get_analysis_types() -> list[str]:
    return list(SCORERS)


def check_analysis_type(analysis_type: str) -> str:
    """Return the analysis type if recognized.

    Raises:
        UnknownAnalysisType: If no scorer is registered for it
    """
    if analysis_type not in SCORERS:
        raise UnknownAnalysisType(
            f"Unknown analysis type: {analysis_type!r}. "
            f"Expected one of: {', '.join(SCORERS)}"
        )
    return analysis_type


class ScoringService:
    """Scores structured resumes for any registered analysis type."""

    def __init__(self, config: Optional[ScorerConfig] = None):
        self.config = config or ScorerConfig()

    def score(
        self,
        analysis_type: str,
        resume: StructuredResume,
        parameters: Optional[Dict[str, Any]] = None
    ) -> DimensionScore:
        check_analysis_type(analysis_type)
        logger.info(f"Scoring resume for '{analysis_type}' analysis")
        if analysis_type == 'overall':
            return score_overall(resume, parameters, config=self.config)
        return SCORERS[analysis_type](resume, parameters)


def score_dimension(
    analysis_type: str,
    resume: StructuredResume,
    parameters: Optional[Dict[str, Any]] = None,
    config: Optional[ScorerConfig] = None
) -> DimensionScore:
    """Score one dimension of a resume.

    Raises:
        UnknownAnalysisType: If the analysis type is not recognized
    """
    return ScoringService(config).score(analysis_type, resume, parameters)
