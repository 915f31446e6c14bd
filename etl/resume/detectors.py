#!/usr/bin/env python3
"""
Section Detectors - Pattern-based extraction of resume sections.

Each detector is a pure function taking the resume text and returning a
slice of the structured resume: a dict with one section name as key. Detectors
do not depend on each other's output and can run in any order. The merge
step lives in etl.resume.extractor.

Patterns are heuristics over line-oriented text. A detector that cannot
resolve a field leaves it as "" rather than guessing.
"""
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Set, Tuple

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from core.utils import DocumentFingerprinter
from etl.resume.models import (
    CertificationEntry,
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    LanguageEntry,
    PersonalInfo,
    ProjectEntry,
    SkillSet,
)
from etl.resume.vocabulary import (
    CERTIFICATION_ISSUERS,
    INTRINSIC_CERTIFICATIONS,
    PROFICIENCY_LEVELS,
    PROJECT_HEADERS,
    SECTION_HEADERS,
    SKILL_PATTERNS,
    SPOKEN_LANGUAGES,
    SUMMARY_HEADERS,
    TECHNICAL_CATEGORIES,
)

_normalize = DocumentFingerprinter.normalize_key

BULLET_RE = re.compile(r'^[\-•*·▪◦>]+\s*')
YEAR_RE = re.compile(r'\b(?:19|20)\d{2}\b')

EMAIL_RE = re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b')
PHONE_LABEL_RE = re.compile(r'(?im)^\s*(?:phone|tel|mobile|cell)\s*[:\-]?\s*(\+?[\d ().-]{7,})$')
PHONE_RE = re.compile(r'(?<![\d/])(?:\+\d{1,3}[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}(?![\d/])')
ADDRESS_RE = re.compile(r'(?im)^\s*address\s*[:\-]\s*(.+)$')
LINKEDIN_RE = re.compile(r'(?i)(?:https?://)?(?:[a-z]{2,3}\.)?linkedin\.com/in/[A-Za-z0-9_%-]+/?')
URL_RE = re.compile(r'(?i)\b(?:https?://|www\.)[^\s,;|<>()]+')

NAME_RE = re.compile(r"^[A-Z][a-zA-Z'.-]+(?:\s+[A-Z][a-zA-Z'.-]+){1,3}$")
DOB_RE = re.compile(r'(?im)^\s*(?:date\s+of\s+birth|d\.?o\.?b\.?|born)\s*[:\-]?\s*(.+)$')
NATIONALITY_RE = re.compile(r'(?im)^\s*(?:nationality|citizenship)\s*[:\-]\s*(.+)$')
LOCATION_LABEL_RE = re.compile(r'(?im)^\s*(?:location|city|based\s+in)\s*[:\-]\s*(.+)$')
CITY_STATE_RE = re.compile(r'\b([A-Z][a-zA-Z]{1,30}(?: [A-Z][a-zA-Z]{1,30}){0,3}, [A-Z]{2})\b')

DEGREE_KEYWORD_RE = re.compile(
    r"(?<![A-Za-z])(?:"
    r"Ph\.?\s?D\b\.?|Doctorate\b|Doctor\s+of\b|"
    r"(?:Master|Bachelor|Associate)(?:'s|’s|s)?(?=\s+(?:degree|of|in)\b)|"
    r"(?:Master|Bachelor|Associate)(?:'s|’s)|"
    r"M\.?Sc\b\.?|B\.?Sc\b\.?|MBA\b|BBA\b|High\s+School\b"
    r")",
    re.IGNORECASE,
)
DEGREE_STOP_RE = re.compile(
    r"\s*(?:[,;|(\[]|\s[-–—]\s|\bfrom\b|\bat\b|\b(?:19|20)\d{2}\b|\bGPA\b)",
    re.IGNORECASE,
)
# Name runs are bounded in word count and word length so that scanning one
# very long line stays linear
_CAP_WORD = r"\b[A-Z][\w&'.-]{0,40}"
INSTITUTION_RE = re.compile(
    rf"(?:(?:University|College|Institute|School|Academy)\s+of\s+{_CAP_WORD}(?:\s+(?:and\s+|&\s+)?{_CAP_WORD}){{0,5}}"
    rf"|{_CAP_WORD}(?:\s+(?:of\s+)?{_CAP_WORD}){{0,5}}\s+(?:University|College|Institute|School|Academy)"
    rf"(?:\s+of\s+{_CAP_WORD}(?:\s+{_CAP_WORD}){{0,3}})?)"
)
FROM_AT_RE = re.compile(rf"\b(?:from|at)\s+(?:the\s+)?({_CAP_WORD}(?:\s+(?:of\s+)?{_CAP_WORD}){{0,5}})")
GPA_RE = re.compile(r'\bGPA\s*[:\-]?\s*(\d(?:\.\d{1,2})?(?:\s*/\s*\d(?:\.\d{1,2})?)?)', re.IGNORECASE)

TITLE_RE = re.compile(
    r"\b(?:(?:Senior|Sr\.|Junior|Jr\.|Lead|Principal|Staff|Head\s+of)\s+)?"
    r"(?:\b[A-Z][A-Za-z+#./-]{0,40}\s+){0,3}?"
    r"(?:Engineer|Developer|Programmer|Analyst|Manager|Consultant|Designer|Architect|Scientist|Administrator|Intern)s?\b"
)
COMPANY_SUFFIX_RE = re.compile(
    rf"({_CAP_WORD}(?:\s+(?:&\s+)?{_CAP_WORD}){{0,5}},?\s+(?i:Inc|Corp|Corporation|LLC|Ltd|Limited|Company|GmbH|PLC)\b\.?)"
)
AT_COMPANY_RE = re.compile(rf"(?:\bat\b|@|\||,)\s*({_CAP_WORD}(?:\s+(?:&\s+)?{_CAP_WORD}){{0,5}})")

_MONTH = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec)[a-z]*\.?"
_DATE = rf"(?:{_MONTH}\s+(?:19|20)\d{{2}}|\d{{1,2}}/(?:19|20)\d{{2}}|(?:19|20)\d{{2}})"
DATE_RANGE_RE = re.compile(
    rf"(?P<start>{_DATE})\s*(?:-|–|—|to|until)\s*(?P<end>{_DATE}|Present|Current|Now|Today)",
    re.IGNORECASE,
)
YEARS_PHRASE_RE = re.compile(r'\b(\d+(?:\.\d+)?)\+?\s*(?:years?|yrs?)\b', re.IGNORECASE)
ONGOING = ('present', 'current', 'now', 'today')

PROFICIENCY_RE = re.compile(
    r'\b(' + '|'.join(PROFICIENCY_LEVELS) + r'|Mother\s+Tongue|[ABC][12])\b',
    re.IGNORECASE,
)
LANGUAGE_RES = tuple((name, re.compile(rf'\b{name}\b')) for name in SPOKEN_LANGUAGES)
CERTIFICATION_RES = tuple(
    (keyword, re.compile(rf'(?<![A-Za-z0-9]){re.escape(keyword)}(?![A-Za-z0-9])'))
    for keyword in CERTIFICATION_ISSUERS
)
CERT_LINE_RE = re.compile(r'certif', re.IGNORECASE)
CERT_SECTION_HEADERS = frozenset({'certifications', 'certificates', 'licenses'})

SUMMARY_RE = re.compile(
    r'^(?:(?:professional|career|executive|personal)\s+)?'
    rf'(?:{"|".join(SUMMARY_HEADERS)})(?:\s+me)?\b\s*[:\-–]?\s*(.*)$',
    re.IGNORECASE,
)


def _lines(text: str) -> List[str]:
    return [line.strip() for line in (text or '').splitlines()]


def _strip_bullet(line: str) -> str:
    return BULLET_RE.sub('', line).strip()


def _header_key(line: str) -> str:
    return _strip_bullet(line).rstrip(':').strip().lower()


def _is_header(line: str) -> bool:
    return bool(line) and _header_key(line) in SECTION_HEADERS


def _last_year(text: str) -> str:
    years = YEAR_RE.findall(text)
    return years[-1] if years else ''


def _first_group(pattern: re.Pattern, text: str) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else ''


# ---------------------------------------------------------------------------
# Personal and contact information
# ---------------------------------------------------------------------------

def detect_personal_info(text: str) -> Dict[str, PersonalInfo]:
    """Name from the header, plus labelled date of birth/nationality/location."""
    lines = [line for line in _lines(text) if line]

    full_name = ''
    for line in lines[:5]:
        lowered = line.lower()
        if any(token in lowered for token in ('@', 'http', 'www', 'resume', 'curriculum vitae')):
            continue
        if _is_header(line) or TITLE_RE.search(line) or any(ch.isdigit() for ch in line):
            continue
        if NAME_RE.match(line):
            full_name = line
            break

    location = _first_group(LOCATION_LABEL_RE, text)
    if not location:
        location = _first_group(CITY_STATE_RE, '\n'.join(lines[:10]))

    return {'personal_info': PersonalInfo(
        full_name=full_name,
        date_of_birth=_first_group(DOB_RE, text),
        nationality=_first_group(NATIONALITY_RE, text),
        location=location,
    )}


def detect_contact_info(text: str) -> Dict[str, ContactInfo]:
    """Email, phone, address, LinkedIn profile and personal website."""
    email_match = EMAIL_RE.search(text)

    phone = _first_group(PHONE_LABEL_RE, text)
    if not phone:
        phone_match = PHONE_RE.search(text)
        phone = phone_match.group(0).strip() if phone_match else ''

    linkedin_match = LINKEDIN_RE.search(text)

    website = ''
    for match in URL_RE.finditer(text):
        url = match.group(0).rstrip('.')
        if 'linkedin.com' not in url.lower():
            website = url
            break

    return {'contact_info': ContactInfo(
        email=email_match.group(0) if email_match else '',
        phone=phone,
        address=_first_group(ADDRESS_RE, text),
        linkedin=linkedin_match.group(0).rstrip('/') if linkedin_match else '',
        website=website,
    )}


# ---------------------------------------------------------------------------
# Skills
# ---------------------------------------------------------------------------

def detect_skills(text: str) -> Dict[str, SkillSet]:
    """Match the curated vocabulary; every hit lands in its category set.

    Languages, frameworks and tools also count as technical skills.
    """
    found: Dict[str, Set[str]] = {name: set() for name in SkillSet.model_fields}
    for canonical, category, pattern in SKILL_PATTERNS:
        if pattern.search(text):
            found[category].add(canonical)
            if category in TECHNICAL_CATEGORIES:
                found['technical'].add(canonical)
    return {'skills': SkillSet(**found)}


# ---------------------------------------------------------------------------
# Education
# ---------------------------------------------------------------------------

def _degree_phrase(line: str, match: re.Match) -> str:
    """Cut the degree phrase from its keyword up to the first delimiter."""
    tail = line[match.start():]
    keyword_length = match.end() - match.start()
    stop = DEGREE_STOP_RE.search(tail, keyword_length)
    phrase = tail[:stop.start()] if stop else tail
    return phrase.strip(' .:-–—')


def _find_institution(text: str, skip: str = '') -> str:
    for match in INSTITUTION_RE.finditer(text):
        candidate = match.group(0).strip(' .')
        if candidate.lower() == 'high school' or (skip and candidate in skip):
            continue
        return candidate
    return ''


def detect_education(text: str) -> Dict[str, List[EducationEntry]]:
    """One entry per degree mention, plus institutions mentioned on their own.

    Overlapping matches (a degree and an institution on the same or adjacent
    lines) collapse into one entry keyed by normalized (degree, institution).
    """
    lines = _lines(text)
    entries: List[EducationEntry] = []
    seen: Set[Tuple[str, str]] = set()
    attached: Set[str] = set()
    consumed: Set[int] = set()
    standalone: Dict[int, EducationEntry] = {}

    def add(entry: EducationEntry) -> Optional[EducationEntry]:
        key = (_normalize(entry.degree), _normalize(entry.institution))
        if key in seen:
            return None
        seen.add(key)
        entries.append(entry)
        return entry

    for i, line in enumerate(lines):
        if not line or _is_header(line):
            continue

        match = DEGREE_KEYWORD_RE.search(line)
        if match:
            degree = _degree_phrase(line, match)
            institution = _find_institution(line, skip=degree)
            if not institution:
                institution = _first_group(FROM_AT_RE, line[match.start():])

            context = line
            nxt = lines[i + 1] if i + 1 < len(lines) else ''
            if nxt and not _is_header(nxt) and not DEGREE_KEYWORD_RE.search(nxt):
                if not institution:
                    institution = _find_institution(nxt)
                    if institution:
                        consumed.add(i + 1)
                context = f"{line} {nxt}"

            if not institution and (i - 1) in standalone:
                # Institution on the line above the degree: fold it in
                previous = standalone.pop(i - 1)
                institution = previous.institution
                entries.remove(previous)
                seen.discard((_normalize(previous.degree), _normalize(previous.institution)))

            add(EducationEntry(
                degree=degree,
                institution=institution,
                year=_last_year(line) or _last_year(context),
                gpa=_first_group(GPA_RE, context),
            ))
            if institution:
                attached.add(_normalize(institution))
            continue

        if i in consumed:
            continue
        institution = _find_institution(line)
        if institution and _normalize(institution) not in attached:
            entry = add(EducationEntry(
                institution=institution,
                year=_last_year(line),
                gpa=_first_group(GPA_RE, line),
            ))
            if entry is not None:
                standalone[i] = entry
                attached.add(_normalize(institution))

    return {'education': entries}


# ---------------------------------------------------------------------------
# Experience
# ---------------------------------------------------------------------------

def _parse_date(token: str, today: date) -> Optional[date]:
    if token.strip().lower() in ONGOING:
        return today
    try:
        return date_parser.parse(token, default=datetime(2000, 1, 1)).date()
    except (ValueError, OverflowError):
        return None


def _find_duration(text: str, today: date) -> str:
    """Render a date range with its length, or an explicit 'N years' phrase."""
    match = DATE_RANGE_RE.search(text)
    if match:
        span = match.group(0).strip()
        start = _parse_date(match.group('start'), today)
        end = _parse_date(match.group('end'), today)
        if start and end and end >= start:
            diff = relativedelta(end, start)
            months = diff.years * 12 + diff.months
            if months >= 12:
                years = months // 12
                return f"{span} ({years} year{'s' if years != 1 else ''})"
            return f"{span} ({months} month{'s' if months != 1 else ''})"
        return span

    match = YEARS_PHRASE_RE.search(text)
    if match:
        return f"{match.group(1)} years"
    return ''


def _find_company(text: str) -> str:
    match = COMPANY_SUFFIX_RE.search(text)
    if match:
        return match.group(1).strip(' ,')
    return ''


def _is_title_line(line: str) -> bool:
    return bool(TITLE_RE.search(line)) and not CERT_LINE_RE.search(line)


def detect_experience(text: str, today: Optional[date] = None) -> Dict[str, List[ExperienceEntry]]:
    """Candidate positions from job-title keywords and company suffixes.

    A title line opens an entry; the company and duration are looked up on the
    same line and the next two lines. Description is the run of following
    lines up to a blank line. Lines with a company suffix but no title open an
    entry of their own unless an earlier entry already used them.
    """
    today = today or date.today()
    lines = _lines(text)
    entries: List[ExperienceEntry] = []
    seen: Set[Tuple[str, str]] = set()
    consumed: Set[int] = set()

    for i, line in enumerate(lines):
        if i in consumed or not line or _is_header(line):
            continue

        title_match = TITLE_RE.search(line) if not CERT_LINE_RE.search(line) else None
        if title_match:
            title = title_match.group(0).strip()
            rest = line[title_match.end():]
            company = _find_company(rest) or _first_group(AT_COMPANY_RE, rest)
            duration = _find_duration(line, today)

            j = i + 1
            while j < len(lines) and j <= i + 2:
                window_line = lines[j]
                if not window_line or _is_header(window_line) or _is_title_line(window_line):
                    break
                used = False
                if not company:
                    company = _find_company(window_line)
                    used = bool(company)
                if not duration:
                    duration = _find_duration(window_line, today)
                    used = used or bool(duration)
                if not used:
                    break
                consumed.add(j)
                j += 1

            description_lines = []
            while j < len(lines) and len(description_lines) < 5:
                desc_line = lines[j]
                if not desc_line or _is_header(desc_line) or _is_title_line(desc_line):
                    break
                description_lines.append(_strip_bullet(desc_line))
                consumed.add(j)
                j += 1

            entry = ExperienceEntry(
                title=title,
                company=company,
                duration=duration,
                description=' '.join(d for d in description_lines if d),
            )
        else:
            company = _find_company(line)
            if not company:
                continue
            entry = ExperienceEntry(company=company, duration=_find_duration(line, today))

        key = (_normalize(entry.title), _normalize(entry.company))
        if key in seen:
            continue
        seen.add(key)
        entries.append(entry)

    return {'experience': entries}


# ---------------------------------------------------------------------------
# Languages, certifications, projects, summary
# ---------------------------------------------------------------------------

def _proficiency_near(line: str, spans: List[Tuple[int, int]], index: int) -> str:
    start, end = spans[index]
    next_start = spans[index + 1][0] if index + 1 < len(spans) else len(line)
    prev_end = spans[index - 1][1] if index > 0 else 0

    after = re.split(r'[,;|]', line[end:next_start])[0]
    before = re.split(r'[,;|/]', line[prev_end:start])[-1]
    for segment in (after, before):
        match = PROFICIENCY_RE.search(segment)
        if match:
            value = match.group(1)
            return value.upper() if len(value) == 2 else value.title()
    return ''


def detect_languages(text: str) -> Dict[str, List[LanguageEntry]]:
    """Spoken languages with the proficiency written next to them."""
    found: Dict[str, LanguageEntry] = {}
    for line in _lines(text):
        hits = sorted(
            (match.start(), match.end(), name)
            for name, pattern in LANGUAGE_RES
            for match in [pattern.search(line)]
            if match
        )
        if not hits:
            continue
        spans = [(start, end) for start, end, _ in hits]
        for index, (_, _, name) in enumerate(hits):
            proficiency = _proficiency_near(line, spans, index)
            if name not in found:
                found[name] = LanguageEntry(language=name, proficiency=proficiency)
            elif proficiency and not found[name].proficiency:
                found[name] = LanguageEntry(language=name, proficiency=proficiency)
    return {'languages': list(found.values())}


def detect_certifications(text: str) -> Dict[str, List[CertificationEntry]]:
    """Certification keywords; vendor names only count on certification lines."""
    entries: List[CertificationEntry] = []
    seen: Set[str] = set()
    in_section = False

    for line in _lines(text):
        if _is_header(line):
            in_section = _header_key(line) in CERT_SECTION_HEADERS
            continue
        if not line:
            continue

        cert_line = in_section or bool(CERT_LINE_RE.search(line))
        hits = [kw for kw, pattern in CERTIFICATION_RES if pattern.search(line)]
        if not hits:
            continue

        if cert_line:
            candidates = [(_strip_bullet(line), hits[0])]
        else:
            candidates = [(kw, kw) for kw in hits if kw in INTRINSIC_CERTIFICATIONS]

        for name, keyword in candidates:
            key = _normalize(name)
            if key in seen:
                continue
            seen.add(key)
            entries.append(CertificationEntry(
                name=name,
                issuer=CERTIFICATION_ISSUERS[keyword],
                date=_last_year(line),
            ))

    return {'certifications': entries}


def detect_projects(text: str) -> Dict[str, List[ProjectEntry]]:
    """Items listed under a Projects/Portfolio header."""
    lines = _lines(text)
    projects: List[Dict[str, Any]] = []
    in_section = False
    start_new = True

    for line in lines:
        if _is_header(line):
            in_section = _header_key(line) in PROJECT_HEADERS
            start_new = True
            continue
        if not in_section:
            continue
        if not line:
            start_new = True
            continue

        is_bullet = bool(BULLET_RE.match(line))
        content = _strip_bullet(line)
        if start_new or is_bullet or not projects:
            parts = re.split(r'\s*(?::|\s[-–—]\s)\s*', content, maxsplit=1)
            projects.append({
                'name': parts[0][:80],
                'description': parts[1] if len(parts) > 1 else '',
                'text': content,
            })
        else:
            current = projects[-1]
            current['description'] = f"{current['description']} {content}".strip()
            current['text'] = f"{current['text']} {content}"
        start_new = False

    entries = []
    for project in projects:
        technologies = sorted({
            canonical for canonical, _, pattern in SKILL_PATTERNS
            if pattern.search(project['text'])
        })
        entries.append(ProjectEntry(
            name=project['name'],
            description=project['description'],
            technologies=technologies,
        ))
    return {'projects': entries}


def detect_summary(text: str) -> Dict[str, str]:
    """Text under the first summary-like header, up to the next blank line."""
    lines = _lines(text)
    for i, line in enumerate(lines):
        match = SUMMARY_RE.match(_strip_bullet(line))
        if not match:
            continue
        # A long line merely starting with "Profile..." is prose, not a header
        if not match.group(1) and not _is_header(line):
            continue

        parts = [match.group(1).strip()] if match.group(1).strip() else []
        j = i + 1
        if not parts and j < len(lines) and not lines[j]:
            j += 1
        while j < len(lines) and len(parts) < 8:
            nxt = lines[j]
            if not nxt or _is_header(nxt):
                break
            parts.append(_strip_bullet(nxt))
            j += 1
        return {'summary': ' '.join(parts)}

    return {'summary': ''}
