"""Core configuration, manifest and target handling for modsweep."""
