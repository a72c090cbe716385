"""Go-doc style API summaries for Odin packages."""

__version__ = "0.1.0"
