#!/usr/bin/env python3
"""
Skills Scoring - Weighted, per-category capped skill counts.

Formula:
- technical:            min(n * 2, 40)
- tools (tools + frameworks): min((t + f) * 1.5, 25)
- databases:            min(n * 3, 15)
- programming languages: min(n * 2, 20)
- total capped at 100, rounded half-up
"""

from typing import Any, Dict, Optional
import logging

from core.scorer.models import DimensionScore
from core.scorer.recommendations import EMPTY_RESULTS, recommendations_for
from core.utils import clamp_score, round_half_up
from etl.resume.models import StructuredResume

logger = logging.getLogger(__name__)

DIMENSION = 'skills'


def calculate_skills_breakdown(resume: StructuredResume) -> Dict[str, float]:
    skills = resume.skills
    return {
        'technical': min(len(skills.technical) * 2, 40),
        'tools': min((len(skills.tools) + len(skills.frameworks)) * 1.5, 25),
        'databases': min(len(skills.databases) * 3, 15),
        'languages': min(len(skills.languages) * 2, 20),
    }


def score_skills(resume: StructuredResume, parameters: Optional[Dict[str, Any]] = None) -> DimensionScore:
    """Score the skills dimension of a structured resume."""
    parameters = dict(parameters or {})
    skills = resume.skills

    if not skills.technical:
        message, recommendations = EMPTY_RESULTS[DIMENSION]
        logger.debug("No technical skills found, skills score is 0")
        return DimensionScore(
            dimension=DIMENSION,
            score=0,
            recommendations=recommendations,
            analysis_meta={'skills': {}, 'parameters': parameters},
            message=message,
        )

    breakdown = calculate_skills_breakdown(resume)
    score = round_half_up(clamp_score(min(sum(breakdown.values()), 100)))

    meta = {
        'skills': {
            category: sorted(getattr(skills, category))
            for category in type(skills).model_fields
        },
        'totalSkills': skills.total(),
        'technicalCount': len(skills.technical),
        'softCount': len(skills.soft),
        'toolsCount': len(skills.tools),
        'frameworksCount': len(skills.frameworks),
        'databasesCount': len(skills.databases),
        'languagesCount': len(skills.languages),
        'parameters': parameters,
    }

    return DimensionScore(
        dimension=DIMENSION,
        score=score,
        breakdown=breakdown,
        recommendations=recommendations_for(DIMENSION, score),
        analysis_meta=meta,
    )
