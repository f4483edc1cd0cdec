"""HTTP surface of crbmnl."""
