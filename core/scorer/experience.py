#!/usr/bin/env python3
"""
Experience Scoring - Years, seniority and variety of listed positions.

Years per entry come from the duration text: the first integer directly
preceding the word "year" ("Jan 2018 - Present (5 years)" -> 5). A duration
without one contributes 0 years.
"""

from typing import Any, Dict, Optional
import logging
import re
from decimal import Decimal

from core.scorer.models import DimensionScore
from core.scorer.recommendations import EMPTY_RESULTS, recommendations_for
from core.utils import clamp_score, round_half_up
from etl.resume.models import StructuredResume

logger = logging.getLogger(__name__)

DIMENSION = 'experience'

YEARS_RE = re.compile(r'(\d+)(?:\.\d+)?\+?\s*(?:-\s*)?years?', re.IGNORECASE)


def parse_years(duration: str) -> int:
    """Coarse year count from a free-text duration."""
    match = YEARS_RE.search(duration or '')
    return int(match.group(1)) if match else 0


def score_experience(resume: StructuredResume, parameters: Optional[Dict[str, Any]] = None) -> DimensionScore:
    """Score the experience dimension of a structured resume."""
    parameters = dict(parameters or {})
    entries = resume.experience

    if not entries:
        message, recommendations = EMPTY_RESULTS[DIMENSION]
        logger.debug("No experience entries found, experience score is 0")
        return DimensionScore(
            dimension=DIMENSION,
            score=0,
            recommendations=recommendations,
            analysis_meta={'experience': [], 'parameters': parameters},
            message=message,
        )

    total_years = sum(parse_years(entry.duration) for entry in entries)
    senior_positions = sum(1 for entry in entries if 'senior' in entry.title.lower())

    breakdown = {
        'years': min(total_years * 5, 50),
        'position': min(senior_positions * 15, 30),
        'variety': min(len(entries) * 4, 20),
    }
    score = round_half_up(clamp_score(sum(breakdown.values())))

    meta = {
        'experience': [entry.model_dump() for entry in entries],
        'totalExperience': len(entries),
        'totalYears': total_years,
        'seniorPositions': senior_positions,
        'averageYearsPerPosition': round_half_up(Decimal(total_years) / len(entries), 1),
        'parameters': parameters,
    }

    return DimensionScore(
        dimension=DIMENSION,
        score=score,
        breakdown=breakdown,
        recommendations=recommendations_for(DIMENSION, score),
        analysis_meta=meta,
    )
