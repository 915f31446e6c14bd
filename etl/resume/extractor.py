#!/usr/bin/env python3
"""
Structured Resume Extractor - Merge detector output into a StructuredResume.

Extraction is best-effort: a detector that fails is logged and its section
keeps the empty default, so extract_structured never raises.
"""
import logging
from datetime import date
from functools import partial
from typing import Any, Callable, Dict, Optional, Tuple

from etl.resume.detectors import (
    detect_certifications,
    detect_contact_info,
    detect_education,
    detect_experience,
    detect_languages,
    detect_personal_info,
    detect_projects,
    detect_skills,
    detect_summary,
)
from etl.resume.models import StructuredResume

logger = logging.getLogger(__name__)

Detector = Callable[[str], Dict[str, Any]]


def _detectors(today: Optional[date] = None) -> Tuple[Tuple[str, Detector], ...]:
    return (
        ('personal_info', detect_personal_info),
        ('contact_info', detect_contact_info),
        ('education', detect_education),
        ('experience', partial(detect_experience, today=today)),
        ('skills', detect_skills),
        ('languages', detect_languages),
        ('certifications', detect_certifications),
        ('projects', detect_projects),
        ('summary', detect_summary),
    )


def extract_structured(text: str, today: Optional[date] = None) -> StructuredResume:
    """Run every section detector over the text and merge the slices.

    Args:
        text: Flat text produced by the text extractor
        today: Reference date for open-ended ranges such as "2019 - Present"

    Returns:
        StructuredResume with every section present (empty when not found)
    """
    if not text or not text.strip():
        logger.debug("Empty resume text, returning empty structure")
        return StructuredResume()

    merged: Dict[str, Any] = {}
    for section, detector in _detectors(today):
        try:
            slice_ = detector(text)
        except Exception as e:
            logger.warning(f"Detector for '{section}' failed, leaving section empty: {e}")
            continue
        if not slice_.get(section):
            logger.debug(f"No {section} found in resume text")
        merged.update(slice_)

    resume = StructuredResume(**merged)
    logger.info(
        f"Extracted resume structure: {len(resume.experience)} experience, "
        f"{len(resume.education)} education, {resume.skills.total()} skills "
        f"(coverage {resume.section_coverage():.0%})"
    )
    return resume
