"""Query compilation and execution."""
