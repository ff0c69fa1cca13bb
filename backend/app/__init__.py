"""Weeklist Application Package — task-tracking backend with time-boxed weeklists.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
