"""Application layer - repository facade, codec and query engine."""
