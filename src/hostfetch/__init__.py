"""hostfetch - host hardware and OS inventory for the terminal."""

__version__ = "0.3.0"
