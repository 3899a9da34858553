"""In-memory building blocks for a TCP endpoint: streams, reassembly, sender, receiver and segments."""

__version__ = "0.1.0"