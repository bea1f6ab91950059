"""Plain-text rendering of lookup results."""
