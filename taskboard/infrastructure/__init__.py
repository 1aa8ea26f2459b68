"""Infrastructure Layer — storage backends, sessions and cross-cutting concerns.

Invariants:
    - Infrastructure implements core/ protocols; core never imports from here
    - All IO failures mapped to StorageError (core/errors.py)

Design Decisions:
    - One module per backend, selected by build_store() from settings
"""
