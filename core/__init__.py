"""core package initialization.

Making `core` an explicit package so imports like `import core.farm`
work reliably when running `main.py` from the project root.
"""

__all__ = ["app", "constants", "data", "events", "farm", "scene", "tuning"]
