"""API Schemas — Pydantic request models for products and home content.

Invariants:
    - Schemas validate shape only; identity and uniqueness rules live in services

Design Decisions:
    - Aliases carry the camelCase wire names; Python attributes stay snake_case
"""
