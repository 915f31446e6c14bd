#!/usr/bin/env python3
"""
Vocabulary tables for resume extraction.

Read-only, process-wide constants built once at import. Every table is a
frozenset, tuple or MappingProxyType so concurrent analysis runs can read them
without coordination.
"""
import re
from types import MappingProxyType
from typing import Pattern, Tuple

# Skill categories
LANGUAGES = 'languages'
FRAMEWORKS = 'frameworks'
TOOLS = 'tools'
DATABASES = 'databases'
SOFT = 'soft'

# Categories that also count towards the "technical" skill set
TECHNICAL_CATEGORIES = frozenset({LANGUAGES, FRAMEWORKS, TOOLS})

SKILL_VOCABULARY = MappingProxyType({
    # Programming languages
    'JavaScript': LANGUAGES,
    'TypeScript': LANGUAGES,
    'Python': LANGUAGES,
    'Java': LANGUAGES,
    'C++': LANGUAGES,
    'C#': LANGUAGES,
    'PHP': LANGUAGES,
    'Ruby': LANGUAGES,
    'Go': LANGUAGES,
    'Rust': LANGUAGES,
    'Kotlin': LANGUAGES,
    'Swift': LANGUAGES,
    'Scala': LANGUAGES,
    'SQL': LANGUAGES,
    'Bash': LANGUAGES,
    # Frameworks and runtimes
    'React': FRAMEWORKS,
    'Angular': FRAMEWORKS,
    'Vue': FRAMEWORKS,
    'Node.js': FRAMEWORKS,
    'Express': FRAMEWORKS,
    'Django': FRAMEWORKS,
    'Flask': FRAMEWORKS,
    'FastAPI': FRAMEWORKS,
    'Spring': FRAMEWORKS,
    'Ruby on Rails': FRAMEWORKS,
    '.NET': FRAMEWORKS,
    'TensorFlow': FRAMEWORKS,
    'PyTorch': FRAMEWORKS,
    'Next.js': FRAMEWORKS,
    # Tools and platforms
    'AWS': TOOLS,
    'Azure': TOOLS,
    'GCP': TOOLS,
    'Docker': TOOLS,
    'Kubernetes': TOOLS,
    'Jenkins': TOOLS,
    'Git': TOOLS,
    'GitHub': TOOLS,
    'GitLab': TOOLS,
    'Terraform': TOOLS,
    'Ansible': TOOLS,
    'Jira': TOOLS,
    'Linux': TOOLS,
    'Webpack': TOOLS,
    # Databases
    'MySQL': DATABASES,
    'PostgreSQL': DATABASES,
    'MongoDB': DATABASES,
    'Redis': DATABASES,
    'Elasticsearch': DATABASES,
    'SQLite': DATABASES,
    'Cassandra': DATABASES,
    'DynamoDB': DATABASES,
    'Oracle Database': DATABASES,
    'SQL Server': DATABASES,
    # Soft skills
    'Leadership': SOFT,
    'Communication': SOFT,
    'Teamwork': SOFT,
    'Collaboration': SOFT,
    'Problem Solving': SOFT,
    'Critical Thinking': SOFT,
    'Time Management': SOFT,
    'Mentoring': SOFT,
    'Adaptability': SOFT,
})

# Alternate spellings resolved to the canonical vocabulary term
SKILL_ALIASES = MappingProxyType({
    'Postgres': 'PostgreSQL',
    'NodeJS': 'Node.js',
    'Node JS': 'Node.js',
    'ReactJS': 'React',
    'React.js': 'React',
    'Vue.js': 'Vue',
    'AngularJS': 'Angular',
    'Golang': 'Go',
    'K8s': 'Kubernetes',
    'Google Cloud': 'GCP',
    'Amazon Web Services': 'AWS',
    'Mongo': 'MongoDB',
    'Rails': 'Ruby on Rails',
    'Problem-Solving': 'Problem Solving',
    'Team Work': 'Teamwork',
})

# Terms that are also ordinary English words; matched case-sensitively
CASE_SENSITIVE_TERMS = frozenset({'Go', 'Express', 'Spring', 'Swift', 'Rust', 'Rails', 'Mongo'})


def _term_pattern(term: str) -> Pattern:
    """Match a term as a token: no letter or digit directly on either side."""
    flags = 0 if term in CASE_SENSITIVE_TERMS else re.IGNORECASE
    escaped = re.escape(term).replace(r'\ ', r'[\s-]+')
    return re.compile(rf'(?<![A-Za-z0-9]){escaped}(?![A-Za-z0-9+#])', flags)


def _build_skill_patterns() -> Tuple[Tuple[str, str, Pattern], ...]:
    patterns = [(term, category, _term_pattern(term)) for term, category in SKILL_VOCABULARY.items()]
    for alias, canonical in SKILL_ALIASES.items():
        patterns.append((canonical, SKILL_VOCABULARY[canonical], _term_pattern(alias)))
    return tuple(patterns)


# (canonical term, category, compiled pattern)
SKILL_PATTERNS = _build_skill_patterns()

SPOKEN_LANGUAGES = (
    'English', 'Spanish', 'French', 'German', 'Italian', 'Portuguese',
    'Russian', 'Chinese', 'Mandarin', 'Cantonese', 'Japanese', 'Korean',
    'Arabic', 'Hindi', 'Urdu', 'Dutch', 'Swedish', 'Polish', 'Turkish',
    'Greek', 'Hebrew',
)

PROFICIENCY_LEVELS = (
    'Native', 'Bilingual', 'Fluent', 'Professional', 'Advanced',
    'Intermediate', 'Conversational', 'Basic', 'Beginner', 'Elementary',
)

# Certification keyword -> issuing body
CERTIFICATION_ISSUERS = MappingProxyType({
    'AWS': 'Amazon Web Services',
    'Azure': 'Microsoft',
    'GCP': 'Google Cloud',
    'Google Cloud': 'Google Cloud',
    'CISSP': 'ISC2',
    'PMP': 'Project Management Institute',
    'Scrum': 'Scrum Alliance',
    'Agile': '',
    'ITIL': 'Axelos',
    'CompTIA': 'CompTIA',
    'Microsoft': 'Microsoft',
    'Oracle': 'Oracle',
    'Cisco': 'Cisco',
    'CCNA': 'Cisco',
    'CKA': 'Cloud Native Computing Foundation',
    'Six Sigma': '',
})

# Keywords that name a credential on their own; vendor names only count on
# certification lines
INTRINSIC_CERTIFICATIONS = frozenset({'CISSP', 'PMP', 'ITIL', 'CompTIA', 'CCNA', 'CKA'})

# Header synonyms that open the summary section
SUMMARY_HEADERS = ('summary', 'objective', 'profile', 'overview', 'about')

PROJECT_HEADERS = ('projects', 'project', 'portfolio', 'personal projects', 'side projects')

# Lines that open a new resume section
SECTION_HEADERS = frozenset({
    'summary', 'professional summary', 'career summary', 'objective', 'career objective',
    'profile', 'professional profile', 'overview', 'about', 'about me',
    'experience', 'work experience', 'professional experience', 'employment',
    'employment history', 'work history', 'education', 'academic background',
    'skills', 'technical skills', 'core competencies', 'languages',
    'certifications', 'certificates', 'licenses', 'projects', 'project',
    'personal projects', 'side projects', 'portfolio', 'interests', 'hobbies',
    'references', 'awards', 'achievements', 'publications', 'contact',
    'contact information', 'volunteer', 'volunteering',
})
