"""
Parsers Module

Turn raw model output into structured data.
"""

from saarthi.ai.parsers.quiz_parser import QuizParseError, parse_quiz_json

__all__ = [
    "QuizParseError",
    "parse_quiz_json",
]
