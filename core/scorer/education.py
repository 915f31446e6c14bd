#!/usr/bin/env python3
"""
Education Scoring - Highest degree on a fixed ladder.

The score is the maximum across entries, not a sum: one PhD dominates any
number of lower degrees. Entries without a degree (institution only) do not
count.
"""

from typing import Any, Dict, Optional, Tuple
import logging
import re

from core.scorer.models import DimensionScore
from core.scorer.recommendations import EMPTY_RESULTS, recommendations_for
from core.utils import DocumentFingerprinter
from etl.resume.models import StructuredResume

logger = logging.getLogger(__name__)

DIMENSION = 'education'

# (score, level, keywords matched as words in the normalized degree text)
DEGREE_LADDER = (
    (100, 'PhD', re.compile(r'\b(?:phd|ph d|doctorate|doctor)\b')),
    (80, 'Master', re.compile(r'\b(?:masters?|msc|m sc|mba)\b')),
    (60, 'Bachelor', re.compile(r'\b(?:bachelors?|bsc|b sc|bba)\b')),
    (40, 'Associate', re.compile(r'\bassociates?\b')),
)
HIGH_SCHOOL = (20, 'HighSchool')


def classify_degree(degree: str) -> Tuple[int, str]:
    """Map degree text to (ladder score, level). Empty degree maps to (0, '')."""
    text = DocumentFingerprinter.normalize_key(degree)
    if not text:
        return 0, ''
    for points, level, pattern in DEGREE_LADDER:
        if pattern.search(text):
            return points, level
    return HIGH_SCHOOL


def degree_level_label(score: int) -> str:
    if score >= 80:
        return 'Advanced'
    if score >= 60:
        return 'Bachelor'
    if score >= 40:
        return 'Associate'
    return 'High School'


def score_education(resume: StructuredResume, parameters: Optional[Dict[str, Any]] = None) -> DimensionScore:
    """Score the education dimension of a structured resume."""
    parameters = dict(parameters or {})
    entries = resume.education

    if not entries:
        message, recommendations = EMPTY_RESULTS[DIMENSION]
        logger.debug("No education entries found, education score is 0")
        return DimensionScore(
            dimension=DIMENSION,
            score=0,
            recommendations=recommendations,
            analysis_meta={'education': [], 'parameters': parameters},
            message=message,
        )

    score = 0
    highest_degree = ''
    for entry in entries:
        points, _ = classify_degree(entry.degree)
        if points > score:
            score = points
            highest_degree = entry.degree

    meta = {
        'education': [entry.model_dump() for entry in entries],
        'totalEducation': len(entries),
        'highestDegree': highest_degree,
        'degreeLevel': degree_level_label(score),
        'parameters': parameters,
    }

    return DimensionScore(
        dimension=DIMENSION,
        score=score,
        breakdown={'degree': score},
        recommendations=recommendations_for(DIMENSION, score),
        analysis_meta=meta,
    )
