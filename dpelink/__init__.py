"""dpelink: match opportunities to energy diagnostics by fuzzy address scoring."""

__version__ = "0.1.0"
