"""Rewrite rules package.

All rules are registered when their modules are imported; the registry is
``RewriteRule.registry``.

Usage:
    from symkit.rewrite.rules import RewriteRule

    for name, rule_cls in RewriteRule.registry.items():
        print(f"{name}: {rule_cls.DESCRIPTION}")
"""

# Import all rule modules to trigger registration
from . import _base, algebra, number_theory

RewriteRule = _base.RewriteRule
isabstract = _base.isabstract

__all__ = [
    "RewriteRule",
    "isabstract",
    "algebra",
    "number_theory",
]
