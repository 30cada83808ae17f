"""Domain layer (pure logic).

- Keep reward/level rules and calculations here.
- Avoid I/O: no DB sessions, no routers or requests, no tokens.
- Prefer deterministic functions (state passed in, new state returned).
"""
