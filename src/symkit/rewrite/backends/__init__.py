"""Verification backends for rewrite rules.

- z3: Z3 SMT solver backend proving rule soundness over the reals

Each backend is imported on demand by :mod:`symkit.rewrite.verifier`.
"""
