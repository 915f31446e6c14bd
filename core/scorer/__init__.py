#!/usr/bin/env python3
"""
Scoring Module - Rule-based scoring of structured resumes.

Public API:
- ScoringService / score_dimension: dispatch an analysis type to its scorer
- DimensionScore: frozen result of one dimension

The module is split into focused, single-responsibility files:

- models.py: Data structures (DimensionScore)
- recommendations.py: Band-based advice tables and rating summaries
- skills.py / experience.py / education.py: Per-dimension formulas
- overall.py: Weighted blend of the three dimensions
- service.py: Scorer registry and ScoringService
"""

from core.scorer.models import DimensionScore
from core.scorer.service import SCORERS, ScoringService, check_analysis_type, score_dimension

__all__ = ['DimensionScore', 'SCORERS', 'ScoringService', 'check_analysis_type', 'score_dimension']
