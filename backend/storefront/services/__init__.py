"""Services Layer — listing provider, logic stage, page shell and write path.

Invariants:
    - resolve_products is the only place the read pipeline awaits the store
    - Services receive their IO collaborators by injection (Protocols from core)
"""
