from .analysis import AnalysisRecord, AnalysisStatus

__all__ = [
    'AnalysisRecord',
    'AnalysisStatus',
]
