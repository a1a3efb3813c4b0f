from .errors import (ScanError, UnmatchedInputError, NoProgressError,
                     TransformError, RuleSetWarning)
from .box import Token, SourcePosition
from .rules import Match, RegexMatcher, LiteralMatcher, Rule, RuleSet, ScannerGenerator
from .sources import InputSource, StringSource, IterableSource, FileSource, as_source
from .scanner import Scanner, make_scanner

__version__ = '0.1.0'

__all__ = [
    "ScannerGenerator", "RuleSet", "Rule",
    "Match", "RegexMatcher", "LiteralMatcher",
    "Scanner", "make_scanner",
    "InputSource", "StringSource", "IterableSource", "FileSource", "as_source",
    "Token", "SourcePosition",
    "ScanError", "UnmatchedInputError", "NoProgressError",
    "TransformError", "RuleSetWarning",
]
