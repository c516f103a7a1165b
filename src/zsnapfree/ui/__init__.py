"""User interfaces: argparse CLI, shared Rich display, and the interactive picker."""
