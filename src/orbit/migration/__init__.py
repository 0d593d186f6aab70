"""PostgreSQL -> MySQL migration.

- tables: dependency graph and migration order
- types: column type and default translation
- ddl: CREATE/DROP TABLE generation
- source/target: database adapters
- migrator: batch copy with per-table error capture
- cli: orbit-migrate entry point
"""
