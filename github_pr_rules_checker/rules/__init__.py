"""
Pull request convention rules
"""

from .evaluator import RuleEvaluator
from .linkage import ReleaseLinkageCheck, check_release_linkage

__all__ = [
    "RuleEvaluator",
    "ReleaseLinkageCheck",
    "check_release_linkage",
]
