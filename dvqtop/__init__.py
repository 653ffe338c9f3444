"""dvqtop - live monitor for the DVC experiment queue."""

__version__ = "0.1.0"
