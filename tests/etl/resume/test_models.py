#!/usr/bin/env python3
"""
Test Resume Models.

Tests the pydantic models in etl/resume/models.py.
"""
import unittest

from etl.resume.models import (
    CertificationEntry,
    ContactInfo,
    EducationEntry,
    PersonalInfo,
    SkillSet,
    StructuredResume,
)


class TestStructuredResume(unittest.TestCase):
    """Test StructuredResume defaults and serialization."""

    def test_defaults_are_empty_not_missing(self):
        resume = StructuredResume()

        self.assertEqual(resume.personal_info, PersonalInfo())
        self.assertEqual(resume.contact_info.email, "")
        self.assertEqual(resume.education, [])
        self.assertEqual(resume.experience, [])
        self.assertEqual(resume.skills.technical, set())
        self.assertEqual(resume.languages, [])
        self.assertEqual(resume.certifications, [])
        self.assertEqual(resume.projects, [])
        self.assertEqual(resume.summary, "")

    def test_default_lists_are_not_shared(self):
        first = StructuredResume()
        second = StructuredResume()
        first.education.append(EducationEntry(degree="BSc"))
        self.assertEqual(second.education, [])

    def test_to_dict_sorts_skill_sets(self):
        resume = StructuredResume(skills=SkillSet(technical={"Python", "Go", "Docker"}))
        data = resume.to_dict()
        self.assertEqual(data["skills"]["technical"], ["Docker", "Go", "Python"])
        self.assertEqual(data["skills"]["soft"], [])

    def test_section_coverage(self):
        self.assertEqual(StructuredResume().section_coverage(), 0.0)

        resume = StructuredResume(
            contact_info=ContactInfo(email="jane@example.com"),
            certifications=[CertificationEntry(name="PMP")],
            summary="Engineer",
        )
        self.assertEqual(resume.section_coverage(), 0.33)

    def test_skillset_total(self):
        skills = SkillSet(technical={"Python", "React"}, frameworks={"React"}, soft={"Leadership"})
        self.assertEqual(skills.total(), 4)


if __name__ == '__main__':
    unittest.main()
