"""cdw — change directory to a Windows path from inside WSL."""

__version__ = "1.0.0"
