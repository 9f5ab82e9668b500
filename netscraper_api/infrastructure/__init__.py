"""Infrastructure Layer — storage backends, migrations, and cross-cutting concerns.

Invariants:
    - Driver exceptions never escape this package unmapped
    - Durable calls are wrapped with retry and error mapping
"""
