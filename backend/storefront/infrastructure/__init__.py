"""Infrastructure Layer — database, query cache, stores and cross-cutting concerns.

Invariants:
    - Store and writer failures mapped to StorefrontError subclasses at this boundary

Design Decisions:
    - Reference implementations (simulated store, SQL writer) behind core Protocols
"""
