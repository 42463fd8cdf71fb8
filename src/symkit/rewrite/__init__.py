"""symkit.rewrite - pattern rewriting and simplification.

- dsl: wildcards, matching, instantiation and guard predicates
- rules: the registered RewriteRule library
- simplifier: constant folding plus rules, iterated to a fixpoint
- verifier: proving rules sound with a solver backend
"""

from .dsl import (
    DynamicConst,
    Wild,
    WildInteger,
    WildNumber,
    instantiate,
    match,
    when,
)
from .rules import RewriteRule
from .simplifier import (
    Simplifier,
    fold_constants,
    get_default_simplifier,
    set_default_simplifier,
    simplify,
)
from .verifier import (
    DEFAULT_OPTIONS,
    VerificationEngine,
    VerificationOptions,
    get_default_engine,
    verify_rules,
    verify_transformation,
)

__all__ = [
    # DSL
    "Wild",
    "WildInteger",
    "WildNumber",
    "DynamicConst",
    "match",
    "instantiate",
    "when",
    # Rules
    "RewriteRule",
    # Simplification
    "Simplifier",
    "fold_constants",
    "get_default_simplifier",
    "set_default_simplifier",
    "simplify",
    # Verification
    "VerificationOptions",
    "DEFAULT_OPTIONS",
    "VerificationEngine",
    "get_default_engine",
    "verify_rules",
    "verify_transformation",
]
