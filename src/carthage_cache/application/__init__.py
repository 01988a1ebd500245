"""Application services composing features with concrete adapters."""
