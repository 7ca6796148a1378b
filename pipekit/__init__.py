"""Run chains of commands joined by pipes, from a file or here-document into a file."""

__version__ = "0.1.0"
__all__ = ["paths", "heredoc", "runner"]