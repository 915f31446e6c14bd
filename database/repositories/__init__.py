from database.repositories.analysis import AnalysisRepository, InMemoryAnalysisRepository

__all__ = [
    'AnalysisRepository',
    'InMemoryAnalysisRepository',
]
