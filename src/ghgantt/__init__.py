"""ghgantt - mirror GitHub issues into a Gantt chart task store."""

__version__ = "0.1.0"
