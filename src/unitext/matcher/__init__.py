"""Pattern matching exports."""
from .engine import MatchIterator, Pattern, compile_pattern, escaped_pattern, escaped_template
from .spans import ByteSubject, Subject, UnitSubject, make_subject

__all__ = [
    "MatchIterator",
    "Pattern",
    "compile_pattern",
    "escaped_pattern",
    "escaped_template",
    "ByteSubject",
    "Subject",
    "UnitSubject",
    "make_subject",
]
