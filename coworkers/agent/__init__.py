"""Agent-facing surface: tools exposed to the host runtime."""
