#!/usr/bin/env python3
"""
Resume Models - Data structures for structured resume extraction.

Every list and set defaults to empty and every text field defaults to "",
so scorers never have to tell a missing section from an empty one.
"""

from decimal import Decimal
from typing import Any, Dict, List, Set

from pydantic import BaseModel, Field

from core.utils import round_half_up


class PersonalInfo(BaseModel):
    full_name: str = ""
    date_of_birth: str = ""
    nationality: str = ""
    location: str = ""


class ContactInfo(BaseModel):
    email: str = ""
    phone: str = ""
    address: str = ""
    linkedin: str = ""
    website: str = ""


class EducationEntry(BaseModel):
    degree: str = ""
    institution: str = ""
    year: str = ""
    gpa: str = ""


class ExperienceEntry(BaseModel):
    title: str = ""
    company: str = ""
    duration: str = ""
    description: str = ""


class SkillSet(BaseModel):
    """Skills by category. Sets: membership matters, order does not."""
    technical: Set[str] = Field(default_factory=set)
    soft: Set[str] = Field(default_factory=set)
    tools: Set[str] = Field(default_factory=set)
    frameworks: Set[str] = Field(default_factory=set)
    databases: Set[str] = Field(default_factory=set)
    languages: Set[str] = Field(default_factory=set)

    def total(self) -> int:
        return sum(len(getattr(self, name)) for name in type(self).model_fields)


class LanguageEntry(BaseModel):
    language: str
    proficiency: str = ""


class CertificationEntry(BaseModel):
    name: str
    issuer: str = ""
    date: str = ""


class ProjectEntry(BaseModel):
    name: str
    description: str = ""
    technologies: List[str] = Field(default_factory=list)


class StructuredResume(BaseModel):
    """Canonical sectioned representation of a resume, input to all scoring."""
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    education: List[EducationEntry] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    skills: SkillSet = Field(default_factory=SkillSet)
    languages: List[LanguageEntry] = Field(default_factory=list)
    certifications: List[CertificationEntry] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)
    summary: str = ""

    def section_coverage(self) -> float:
        """Fraction of the nine sections that hold any extracted content."""
        sections = [
            any(self.personal_info.model_dump().values()),
            any(self.contact_info.model_dump().values()),
            bool(self.education),
            bool(self.experience),
            self.skills.total() > 0,
            bool(self.languages),
            bool(self.certifications),
            bool(self.projects),
            bool(self.summary),
        ]
        return round_half_up(Decimal(sum(sections)) / len(sections), 2)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict; skill sets are rendered as sorted lists."""
        data = self.model_dump()
        data['skills'] = {
            category: sorted(values) for category, values in data['skills'].items()
        }
        return data
