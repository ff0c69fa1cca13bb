"""Services Layer — user registry, weeklist lifecycle engine, and expiry sweeper.

Invariants:
    - Services orchestrate IO around the pure rules in core/ (read, decide, write)
    - Services raise WeeklistError subclasses; they never build HTTP responses

Design Decisions:
    - One service per component for locality (no god objects)
    - Repositories injected through constructors: tests swap them without patching
"""
