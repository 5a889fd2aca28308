"""nodeweave HTTP server: workflow persistence, generation and uploads."""
