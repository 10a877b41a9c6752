"""Constants, roster slot resolution and bye week helpers."""
