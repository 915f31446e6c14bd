"""Pipeline execution modules for the CV analyzer."""

from .control import AdmissionController
from .runner import AnalysisRunner, run_analysis

__all__ = ['AdmissionController', 'AnalysisRunner', 'run_analysis']
