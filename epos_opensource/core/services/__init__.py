"""Core services — the use cases the CLI and the installer call."""
