"""Format-independent drawing types, geometry and font helpers."""
