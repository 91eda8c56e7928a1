"""
Callsmith Utilities

Common utilities used across the package.
"""

from .json_parser import clean_json_string, extract_json_from_text, load_json_object

__all__ = [
    "extract_json_from_text",
    "clean_json_string",
    "load_json_object",
]
