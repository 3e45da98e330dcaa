"""Date-range picker services: date primitives, grids, decorations and presets."""
