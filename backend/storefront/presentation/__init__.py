"""Presentation Layer — synchronous HTML rendering and query-state binding.

Invariants:
    - Nothing in presentation/ awaits; renderers take already-resolved payloads
    - AddressState is the single source of truth for query params on the page

Design Decisions:
    - Jinja2 templates with autoescape for all user-controlled text (q, product names)
"""
