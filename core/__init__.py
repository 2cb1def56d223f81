"""core package initialization.

Making `core` an explicit package so imports like `import core.grid`
work reliably when running `main.py` from the project root.
"""

__all__ = ["app", "collision", "constants", "ecs", "events", "grid",
           "level", "scene", "tuning"]
