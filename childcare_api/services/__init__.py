"""Service layer - business rules.

Services validate and orchestrate; they reach storage only through the
repositories handed to them.
"""
