"""
Checks module for the dictionary validator.

Each checker is a pure function that returns a list of findings:
schema, category placement, link graph, chaining grammar and quick
reference coverage.
"""

from idk_validator.checks.categories import check_category, check_category_coverage
from idk_validator.checks.chaining import ChainingExpression, check_chaining, parse_expression
from idk_validator.checks.links import ReferenceEdge, build_reference_graph, check_links
from idk_validator.checks.matching import get_matcher
from idk_validator.checks.schema import check_schema
from idk_validator.checks.vocabulary import CommandVocabulary, check_quick_reference

__all__ = [
    "check_category",
    "check_category_coverage",
    "ChainingExpression",
    "check_chaining",
    "parse_expression",
    "ReferenceEdge",
    "build_reference_graph",
    "check_links",
    "get_matcher",
    "check_schema",
    "CommandVocabulary",
    "check_quick_reference",
]
