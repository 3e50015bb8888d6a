"""
Repositories package.

Async repositories implementing the repository pattern over the ORM models:
one generic CRUD repository per entity table and one link repository per
association table.
"""
