"""Application layer: read/write services and notifications."""
