"""Infrastructure Layer — storage, identity services and cross-cutting concerns.

Invariants:
    - Infrastructure never imports core/ rules, only core/ errors and types
    - Library exceptions (SQLAlchemy, jose, bcrypt) mapped to WeeklistError subclasses

Design Decisions:
    - Thin wrappers over raw libraries: services depend on these, never on the libraries
"""
