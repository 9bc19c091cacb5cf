"""Console client."""
