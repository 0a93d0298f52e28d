"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services await storage collaborators; core modules decide what the answers mean
    - Every write follows validate -> name uniqueness -> slug assignment -> save

Design Decisions:
    - Repositories injected at construction so tests swap in in-memory fakes
"""
