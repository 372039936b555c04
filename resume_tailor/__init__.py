"""Resume tailoring engine: keyword extraction, ATS scoring and draft reconciliation."""

__version__ = "0.1.0"
