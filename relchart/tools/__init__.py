"""relchart.tools package

Command-line helpers run as `python -m relchart.tools.<name>`.

Keep this package's __init__ free of eager imports so module execution via
`python -m ...` has no import-time side effects.
"""

__all__: list[str] = []
