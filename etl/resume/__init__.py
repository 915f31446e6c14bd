#!/usr/bin/env python3
"""
Resume Extraction Module - text and structure extraction for uploaded resumes.

Handles:
- Flat text extraction from pdf/doc/docx/txt/rtf documents
- Pattern-based detection of resume sections
- Merging detector output into a StructuredResume
"""
from etl.resume.extractor import extract_structured
from etl.resume.models import StructuredResume
from etl.resume.parser import RawDocument, ResumeParser, extract_text, extract_text_async

__all__ = [
    'RawDocument',
    'ResumeParser',
    'StructuredResume',
    'extract_structured',
    'extract_text',
    'extract_text_async',
]
