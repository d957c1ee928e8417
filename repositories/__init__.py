"""
repositories/ - Data Access Layer
==================================
One repository per ledger table, all built on ``RecordRepository``.
Repositories receive row dicts from PostgreSQL and return frozen domain
model objects; every query is scoped to the owning account (``user_id``).
"""
