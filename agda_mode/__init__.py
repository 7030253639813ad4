"""Drive Agda's JSON interaction mode: commands, typed responses and a session."""

__version__ = "0.1.9"