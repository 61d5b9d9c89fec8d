"""templar - project template scaffolding."""

__version__ = "1.0.0"
