#!/usr/bin/env python3
"""
Recommendations - Fixed advice tables looked up by score band.

Bands are [0, 30), [30, 60), [60, 80) and [80, 100]. Messages are returned as
written; nothing is interpolated.
"""

from types import MappingProxyType
from typing import Iterable, Tuple

BAND_LIMITS = (30, 60, 80)

RECOMMENDATIONS = MappingProxyType({
    'skills': (
        (
            "Add more technical skills to your CV",
            "Include programming languages you know",
            "Add tools and frameworks you have experience with",
        ),
        (
            "Consider adding more advanced technical skills",
            "Include database technologies you know",
            "Add cloud platform experience if applicable",
        ),
        (
            "Your skills section is good, consider adding specialized tools",
            "Include any certifications you have",
        ),
        (
            "Your technical skill set is strong and well rounded",
            "Keep your skills list current with the tools you use day to day",
        ),
    ),
    'experience': (
        (
            "Add more work experience to your CV",
            "Include internships or volunteer work if applicable",
            "Describe your responsibilities and achievements",
        ),
        (
            "Add more details about your work experience",
            "Include quantifiable achievements",
            "Consider adding project-based experience",
        ),
        (
            "Your experience section is comprehensive",
            "Consider highlighting leadership roles",
        ),
        (
            "Your work history is strong and well documented",
            "Keep achievements quantified as your responsibilities grow",
        ),
    ),
    'education': (
        (
            "Add your educational background to your CV",
            "Include any certifications or training programs",
        ),
        (
            "Consider pursuing higher education if applicable",
            "Add any relevant certifications",
        ),
        (
            "Your education background is strong",
            "Consider adding any specialized training",
        ),
        (
            "Your academic credentials are excellent",
            "Mention research, publications or honors related to your target role",
        ),
    ),
})

# "No X found" short-circuit: (message, recommendations)
EMPTY_RESULTS = MappingProxyType({
    'skills': ("No skills found in CV", ("Add technical skills to your CV",)),
    'experience': ("No work experience found in CV", ("Add work experience to your CV",)),
    'education': ("No education found in CV", ("Add education information to your CV",)),
})

# (lower bound, rating, summary), highest first
RATING_BANDS = (
    (80, 'excellent', "Excellent CV with strong qualifications across all areas."),
    (60, 'good', "Good CV with room for improvement in some areas."),
    (40, 'fair', "Fair CV that would benefit from additional content and details."),
    (0, 'needs improvement', "Basic CV that needs significant improvement to be competitive."),
)


def band_index(score: float) -> int:
    """Index of the band the score falls in (0 for <30 ... 3 for >=80)."""
    for index, limit in enumerate(BAND_LIMITS):
        if score < limit:
            return index
    return len(BAND_LIMITS)


def recommendations_for(dimension: str, score: float) -> Tuple[str, ...]:
    return RECOMMENDATIONS[dimension][band_index(score)]


def rating_for(score: float) -> Tuple[str, str]:
    """Return (rating, summary) for an overall score."""
    for lower, rating, summary in RATING_BANDS:
        if score >= lower:
            return rating, summary
    return RATING_BANDS[-1][1], RATING_BANDS[-1][2]


def merge_recommendations(*groups: Iterable[str]) -> Tuple[str, ...]:
    """Union of recommendation lists, first occurrence wins."""
    return tuple(dict.fromkeys(message for group in groups for message in group))
