"""Backend and device endpoint calls."""
