"""
Package version information.
This is kept in a separate file to avoid circular import problems.
"""

# Version should be on a line by itself for easy parsing by automated tools
__version__ = "0.1.0"
