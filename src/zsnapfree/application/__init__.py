"""Application services coordinating features for the UI layers."""
