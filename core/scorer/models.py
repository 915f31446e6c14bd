#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple

MAX_SCORE = 100


@dataclass(frozen=True)
class DimensionScore:
    """Score for one analysis dimension (skills, experience, education, overall).

    breakdown is None only when the dimension had nothing to score, in which
    case message explains what was missing.
    """
    dimension: str
    score: int
    max_score: int = MAX_SCORE
    breakdown: Optional[Dict[str, Any]] = None
    recommendations: Tuple[str, ...] = ()
    analysis_meta: Dict[str, Any] = field(default_factory=dict)
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict in the published result shape, None fields omitted."""
        data = asdict(self)
        result = {
            'dimension': data['dimension'],
            'score': data['score'],
            'maxScore': data['max_score'],
            'breakdown': data['breakdown'],
            'recommendations': list(data['recommendations']),
            'analysis': data['analysis_meta'],
            'message': data['message'],
        }
        return {key: value for key, value in result.items() if value is not None}
