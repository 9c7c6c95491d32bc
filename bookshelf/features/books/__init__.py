"""Book catalogue feature."""
