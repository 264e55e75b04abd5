"""Domain layer for the text adaptation service."""
