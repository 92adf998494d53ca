"""Router helpers."""
