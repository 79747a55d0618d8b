"""Command handlers for the sdkprune CLI. Each module exposes run(args) -> int."""
