"""The agda-tac REPL: edit an Agda file and query Agda one command at a time."""

__version__ = "0.1.6"