"""Generic soft-delete entity persistence over a document store."""
