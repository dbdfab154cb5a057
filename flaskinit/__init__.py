"""flaskinit — scaffold a Flask project with its own virtual environment."""

__version__ = "0.1.0"
