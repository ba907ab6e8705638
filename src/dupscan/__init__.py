"""Find files that share a name across directory trees."""

__version__ = "0.1.0"
