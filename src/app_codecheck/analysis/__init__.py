"""
Static Analysis Package.

This package contains the policy model and the visitor that inspects PHP
syntax trees for forbidden class, interface and constant usage.

Modules:
    - ``policy``: Immutable policies and the per-file alias-aware blacklist table.
    - ``diagnostics``: Diagnostic records and message templates.
    - ``code_check``: The visitor producing diagnostics.
"""

from app_codecheck.analysis.code_check import CodeCheckVisitor
from app_codecheck.analysis.diagnostics import Diagnostic
from app_codecheck.analysis.policy import BlacklistTable, Policy, PolicyError

__all__ = ["BlacklistTable", "CodeCheckVisitor", "Diagnostic", "Policy", "PolicyError"]
