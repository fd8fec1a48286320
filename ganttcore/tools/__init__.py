"""ganttcore.tools package

Command-line utilities around the engine.

Keep this package's __init__ free of eager imports so `python -m ganttcore.tools.<name>`
has no import-time side effects.
"""

__all__: list[str] = []
