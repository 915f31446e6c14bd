#!/usr/bin/env python3
"""
Custom exceptions for the analysis pipeline.
"""


class AnalysisError(Exception):
    """Base exception for analysis pipeline errors."""
    pass


class ExtractionError(AnalysisError):
    """Raised when text cannot be obtained from a raw document."""
    pass


class UnsupportedFormat(ExtractionError):
    """Raised when the declared document format has no extraction strategy."""
    pass


class DecodeError(ExtractionError):
    """Raised when a document's bytes cannot be decoded into text."""
    pass


class ExtractionUnavailable(ExtractionError):
    """Raised when the external decoder for a format is not available."""
    pass


class UnknownAnalysisType(AnalysisError):
    """Raised when the requested analysis type is not recognized."""
    pass


class InvalidStatusTransition(AnalysisError):
    """Raised when an analysis record is moved outside its lifecycle."""
    pass


class AnalysisInFlightError(AnalysisError):
    """Raised when the same analysis is already running for a document."""
    pass
