"""HTTP surface for the relay device registry."""
