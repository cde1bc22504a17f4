"""3D math helpers."""
