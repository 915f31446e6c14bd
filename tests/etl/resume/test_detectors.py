"""Tests for the pattern-based section detectors."""
from datetime import date
from unittest import TestCase

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
from tests.fixtures.resume_fixtures import SAMPLE_RESUME_TEXT


class TestPersonalInfo(TestCase):

    def test_name_from_header(self):
        info = detect_personal_info(SAMPLE_RESUME_TEXT)['personal_info']
        self.assertEqual(info.full_name, 'Jane Doe')
        self.assertEqual(info.location, 'Austin, TX')

    def test_labelled_fields(self):
        text = (
            "John Smith\n"
            "Date of Birth: 1990-05-12\n"
            "Nationality: Canadian\n"
            "Location: Toronto, Canada\n"
        )
        info = detect_personal_info(text)['personal_info']

        self.assertEqual(info.full_name, 'John Smith')
        self.assertEqual(info.date_of_birth, '1990-05-12')
        self.assertEqual(info.nationality, 'Canadian')
        self.assertEqual(info.location, 'Toronto, Canada')

    def test_title_line_is_not_a_name(self):
        info = detect_personal_info("Senior Software Engineer\nexperienced builder")['personal_info']
        self.assertEqual(info.full_name, '')


class TestContactInfo(TestCase):

    def test_sample(self):
        contact = detect_contact_info(SAMPLE_RESUME_TEXT)['contact_info']

        self.assertEqual(contact.email, 'jane.doe@example.com')
        self.assertEqual(contact.phone, '(555) 123-4567')
        self.assertEqual(contact.linkedin, 'linkedin.com/in/janedoe')
        self.assertEqual(contact.website, 'https://github.com/janedoe')

    def test_labelled_phone_and_address(self):
        text = "Phone: +44 20 7946 0958\nAddress: 221B Baker Street, London"
        contact = detect_contact_info(text)['contact_info']

        self.assertEqual(contact.phone, '+44 20 7946 0958')
        self.assertEqual(contact.address, '221B Baker Street, London')

    def test_linkedin_is_not_the_website(self):
        text = "https://www.linkedin.com/in/jdoe/ and www.jdoe.dev."
        contact = detect_contact_info(text)['contact_info']

        self.assertEqual(contact.linkedin, 'https://www.linkedin.com/in/jdoe')
        self.assertEqual(contact.website, 'www.jdoe.dev')

    def test_nothing_found(self):
        contact = detect_contact_info("no contact details here")['contact_info']
        self.assertEqual(contact.model_dump(), {
            'email': '', 'phone': '', 'address': '', 'linkedin': '', 'website': ''
        })


class TestSkills(TestCase):

    def test_category_assignment(self):
        skills = detect_skills("JavaScript, React, Node.js, PostgreSQL")['skills']

        self.assertEqual(skills.technical, {'JavaScript', 'React', 'Node.js'})
        self.assertEqual(skills.languages, {'JavaScript'})
        self.assertEqual(skills.frameworks, {'React', 'Node.js'})
        self.assertEqual(skills.databases, {'PostgreSQL'})
        self.assertEqual(skills.tools, set())

    def test_token_boundaries(self):
        """Java is not found inside JavaScript, SQL not inside PostgreSQL."""
        skills = detect_skills("JavaScript and PostgreSQL")['skills']

        self.assertNotIn('Java', skills.languages)
        self.assertNotIn('SQL', skills.languages)

    def test_case_insensitive_except_ambiguous_terms(self):
        skills = detect_skills("python, DOCKER, go to the store")['skills']

        self.assertIn('Python', skills.languages)
        self.assertIn('Docker', skills.tools)
        self.assertNotIn('Go', skills.languages)

        skills = detect_skills("Services written in Go")['skills']
        self.assertIn('Go', skills.languages)

    def test_aliases_collapse(self):
        skills = detect_skills("Postgres, PostgreSQL, ReactJS, React")['skills']

        self.assertEqual(skills.databases, {'PostgreSQL'})
        self.assertEqual(skills.frameworks, {'React'})

    def test_soft_skills_not_technical(self):
        skills = detect_skills("Leadership and communication")['skills']

        self.assertEqual(skills.soft, {'Leadership', 'Communication'})
        self.assertEqual(skills.technical, set())

    def test_symbols_in_terms(self):
        skills = detect_skills("C++, C# and .NET")['skills']
        self.assertTrue({'C++', 'C#'} <= skills.languages)
        self.assertIn('.NET', skills.frameworks)


class TestEducation(TestCase):

    def test_sample(self):
        entries = detect_education(SAMPLE_RESUME_TEXT)['education']

        self.assertEqual(len(entries), 2)
        master, bachelor = entries
        self.assertEqual(master.degree, 'Master of Science in Computer Science')
        self.assertEqual(master.institution, 'Stanford University')
        self.assertEqual(master.year, '2015')
        self.assertEqual(bachelor.degree, 'Bachelor of Arts')
        self.assertEqual(bachelor.institution, 'Rice University')
        self.assertEqual(bachelor.year, '2013')
        self.assertEqual(bachelor.gpa, '3.8/4.0')

    def test_from_phrase_institution(self):
        entries = detect_education("PhD in Computer Science from MIT")['education']

        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].degree, 'PhD in Computer Science')
        self.assertEqual(entries[0].institution, 'MIT')

    def test_institution_on_previous_line(self):
        entries = detect_education("Stanford University\nBachelor of Science, 2015")['education']

        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].degree, 'Bachelor of Science')
        self.assertEqual(entries[0].institution, 'Stanford University')
        self.assertEqual(entries[0].year, '2015')

    def test_institution_on_next_line(self):
        entries = detect_education("Master of Business Administration\nUniversity of Oxford 2019")['education']

        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].institution, 'University of Oxford')
        self.assertEqual(entries[0].year, '2019')

    def test_institution_only(self):
        entries = detect_education("Coursework at Lincoln College")['education']

        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].degree, '')
        self.assertEqual(entries[0].institution, 'Lincoln College')

    def test_duplicates_collapse(self):
        text = "Master of Science, Stanford University\nMaster of Science, Stanford University"
        self.assertEqual(len(detect_education(text)['education']), 1)

    def test_nothing_found(self):
        self.assertEqual(detect_education("Hobbies: chess")['education'], [])


class TestExperience(TestCase):

    def test_sample(self):
        entries = detect_experience(SAMPLE_RESUME_TEXT, today=date(2024, 1, 1))['experience']

        self.assertEqual(len(entries), 2)
        senior, developer = entries
        self.assertEqual(senior.title, 'Senior Software Engineer')
        self.assertEqual(senior.company, 'Acme Corp')
        self.assertEqual(senior.duration, 'Jan 2018 - Jan 2023 (5 years)')
        self.assertEqual(senior.description, 'Built data pipelines in Python and PostgreSQL')
        self.assertEqual(developer.title, 'Software Developer')
        self.assertEqual(developer.company, 'Globex LLC')
        self.assertEqual(developer.duration, '2015 - 2018 (3 years)')

    def test_open_ended_range(self):
        text = "Data Analyst, Initech Inc\nMar 2020 - Present"
        entry = detect_experience(text, today=date(2023, 3, 1))['experience'][0]

        self.assertEqual(entry.title, 'Data Analyst')
        self.assertEqual(entry.company, 'Initech Inc')
        self.assertEqual(entry.duration, 'Mar 2020 - Present (3 years)')

    def test_short_range_in_months(self):
        entry = detect_experience("Design Intern\nJun 2022 - Sep 2022")['experience'][0]
        self.assertEqual(entry.duration, 'Jun 2022 - Sep 2022 (3 months)')

    def test_years_phrase(self):
        entry = detect_experience("Project Manager with 5+ years of delivery")['experience'][0]

        self.assertEqual(entry.title, 'Project Manager')
        self.assertEqual(entry.duration, '5 years')

    def test_company_only_line(self):
        entries = detect_experience("Volunteered at Hooli Inc for a summer")['experience']

        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].title, '')
        self.assertEqual(entries[0].company, 'Hooli Inc')

    def test_certification_line_is_not_a_position(self):
        entries = detect_experience("AWS Certified Solutions Architect")['experience']
        self.assertEqual(entries, [])

    def test_duplicates_collapse(self):
        text = "Backend Developer at Umbrella Corp\n\nBackend Developer at Umbrella Corp"
        self.assertEqual(len(detect_experience(text)['experience']), 1)


class TestLanguages(TestCase):

    def test_sample(self):
        entries = detect_languages(SAMPLE_RESUME_TEXT)['languages']
        self.assertEqual(
            [(e.language, e.proficiency) for e in entries],
            [('English', 'Native'), ('Spanish', 'Intermediate')],
        )

    def test_proficiency_before_name(self):
        entries = detect_languages("Native English, Fluent Spanish")['languages']
        self.assertEqual(
            [(e.language, e.proficiency) for e in entries],
            [('English', 'Native'), ('Spanish', 'Fluent')],
        )

    def test_cefr_level(self):
        entries = detect_languages("German - B2")['languages']
        self.assertEqual(entries[0].proficiency, 'B2')

    def test_one_entry_per_language(self):
        entries = detect_languages("French\nFrench (Advanced)")['languages']
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].proficiency, 'Advanced')


class TestCertifications(TestCase):

    def test_sample(self):
        entries = detect_certifications(SAMPLE_RESUME_TEXT)['certifications']

        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].name, 'AWS Certified Solutions Architect - Associate (2021)')
        self.assertEqual(entries[0].issuer, 'Amazon Web Services')
        self.assertEqual(entries[0].date, '2021')

    def test_vendor_in_skills_list_is_not_a_certification(self):
        entries = detect_certifications("Skills: AWS, Docker, Azure")['certifications']
        self.assertEqual(entries, [])

    def test_credential_acronyms_anywhere(self):
        entries = detect_certifications("Holder of CISSP and PMP since 2019")['certifications']

        self.assertEqual([e.name for e in entries], ['CISSP', 'PMP'])
        self.assertEqual(entries[0].issuer, 'ISC2')
        self.assertEqual(entries[1].date, '2019')


class TestProjects(TestCase):

    def test_sample(self):
        entries = detect_projects(SAMPLE_RESUME_TEXT)['projects']

        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].name, 'Ledger')
        self.assertEqual(entries[0].description, 'double-entry bookkeeping service built with Django and Redis')
        self.assertEqual(entries[0].technologies, ['Django', 'Redis'])

    def test_continuation_lines(self):
        text = "Projects\n- Tracker - habit tracking app\n  written in Flutter and Python\n- Blog"
        entries = detect_projects(text)['projects']

        self.assertEqual([e.name for e in entries], ['Tracker', 'Blog'])
        self.assertEqual(entries[0].description, 'habit tracking app written in Flutter and Python')
        self.assertEqual(entries[0].technologies, ['Python'])

    def test_no_projects_section(self):
        self.assertEqual(detect_projects("Ledger: a side project")['projects'], [])


class TestSummary(TestCase):

    def test_sample(self):
        summary = detect_summary(SAMPLE_RESUME_TEXT)['summary']
        self.assertEqual(summary, 'Backend engineer focused on reliable data platforms.')

    def test_inline_header(self):
        text = "Objective: Seeking a backend role\nwith a strong mentoring culture\n\nExperience"
        self.assertEqual(
            detect_summary(text)['summary'],
            'Seeking a backend role with a strong mentoring culture',
        )

    def test_stops_at_next_header(self):
        text = "Professional Summary\nBuilds APIs.\nSkills\nPython"
        self.assertEqual(detect_summary(text)['summary'], 'Builds APIs.')

    def test_missing(self):
        self.assertEqual(detect_summary("Jane Doe\nEngineer")['summary'], '')
