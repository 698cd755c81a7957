"""An interactive Unix shell with job control."""

__version__ = "0.1.0"
__all__ = ["commands", "jobs", "parsing", "shell", "signals"]