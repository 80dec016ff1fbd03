"""JSON API consumed by the rendering layer."""
