"""Use cases — the top-level operations the CLI invokes."""
