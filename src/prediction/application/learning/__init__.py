from .patterns import analyze_patterns
from .scheduler import LearningScheduler

__all__ = ['analyze_patterns', 'LearningScheduler']
