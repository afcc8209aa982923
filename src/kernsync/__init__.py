"""kernsync - mirror scheduler sources into a kernel tree and chain their builds."""

__version__ = "0.1.0"
