"""Core package: column derivation, preference storage and table state."""
