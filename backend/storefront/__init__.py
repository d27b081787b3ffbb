"""Storefront Application Package — products listing page and its write path.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
