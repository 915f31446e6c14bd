#!/usr/bin/env python3
"""
Overall Scoring - Weighted blend of the skills, experience and education scores.

Formula:
- overall = round_half_up(skills * w_skills + experience * w_experience + education * w_education)
- defaults: w_skills=0.35, w_experience=0.40, w_education=0.25

Recommendations are the union of the three sub-score lists in order of
first appearance.
"""

from decimal import Decimal
from typing import Any, Dict, Optional
import logging

from core.config_loader import ScorerConfig
from core.scorer.education import score_education
from core.scorer.experience import score_experience
from core.scorer.models import DimensionScore
from core.scorer.recommendations import merge_recommendations, rating_for
from core.scorer.skills import score_skills
from core.utils import clamp_score, round_half_up
from etl.resume.models import StructuredResume

logger = logging.getLogger(__name__)

DIMENSION = 'overall'


def combine_scores(
    skills: DimensionScore,
    experience: DimensionScore,
    education: DimensionScore,
    config: Optional[ScorerConfig] = None,
    parameters: Optional[Dict[str, Any]] = None
) -> DimensionScore:
    """
    Blend three dimension scores into the overall score.

    Args:
        skills: Skills dimension result
        experience: Experience dimension result
        education: Education dimension result
        config: ScorerConfig with the dimension weights
        parameters: Free-form analysis parameters, recorded in the meta

    Returns:
        DimensionScore for the 'overall' dimension
    """
    cfg = config or ScorerConfig()
    weights = {
        'skills': cfg.weight_skills,
        'experience': cfg.weight_experience,
        'education': cfg.weight_education,
    }

    # Decimal arithmetic: 90 * 0.35 must be exactly 31.5
    weighted = sum(
        Decimal(str(result.score)) * Decimal(str(weights[name]))
        for name, result in (('skills', skills), ('experience', experience), ('education', education))
    )
    score = round_half_up(clamp_score(weighted))
    rating, summary = rating_for(score)

    logger.debug(
        f"Overall score {score} ({rating}): skills={skills.score}, "
        f"experience={experience.score}, education={education.score}"
    )

    return DimensionScore(
        dimension=DIMENSION,
        score=score,
        breakdown={
            'skills': skills.score,
            'experience': experience.score,
            'education': education.score,
        },
        recommendations=merge_recommendations(
            skills.recommendations,
            experience.recommendations,
            education.recommendations,
        ),
        analysis_meta={
            'weights': weights,
            'rating': rating,
            'summary': summary,
            'skillsAnalysis': skills.to_dict(),
            'experienceAnalysis': experience.to_dict(),
            'educationAnalysis': education.to_dict(),
            'parameters': dict(parameters or {}),
        },
    )


def score_overall(
    resume: StructuredResume,
    parameters: Optional[Dict[str, Any]] = None,
    config: Optional[ScorerConfig] = None
) -> DimensionScore:
    """Score every dimension of the resume and blend the results."""
    return combine_scores(
        score_skills(resume, parameters),
        score_experience(resume, parameters),
        score_education(resume, parameters),
        config=config,
        parameters=parameters,
    )
