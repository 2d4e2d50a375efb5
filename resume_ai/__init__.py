"""Resume extraction service: LLM extraction, deterministic repair and graded validation."""

__version__ = "1.0.0"
