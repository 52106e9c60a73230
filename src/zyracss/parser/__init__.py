"""Parsing: class tokens, bracket values and markup extraction."""

from zyracss.parser.class_parser import ClassSyntaxParser, disambiguate, parse_class
from zyracss.parser.extractor import extract_classes, extract_classes_from_many
from zyracss.parser.value_parser import ParsedValue, parse_value

__all__ = [
    "ClassSyntaxParser",
    "parse_class",
    "disambiguate",
    "ParsedValue",
    "parse_value",
    "extract_classes",
    "extract_classes_from_many",
]
