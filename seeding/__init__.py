# seeding/__init__.py
"""
Development-network seed fixtures.

Provides:
- Settings & network gate for seeding runs
- Core domain models (counters, open results, position/order records, fixture)
- Position and order seeders plus the fixture writer
- Migration entry point (`do_migration`) for deploy drivers
- In-memory development ledger implementing the position/order collaborators
"""
