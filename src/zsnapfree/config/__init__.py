"""Runtime configuration for zsnapfree."""
