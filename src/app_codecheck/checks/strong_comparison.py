"""
Strong Comparison Check.

Forbids no symbols; it only turns on reporting of `==` and `!=`.
"""

from app_codecheck.checks.base import BaseCheck, register_check


@register_check("strong-comparison")
class StrongComparisonCheck(BaseCheck):
  strong_comparison = True
