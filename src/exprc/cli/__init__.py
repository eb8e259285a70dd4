"""
exprc Command-Line Interface
============================

This package provides the command-line tool for the expression compiler:

- **exprc compile**: translate an expression to assembly
- **exprc run**: translate and execute, printing the value
- **exprc hello**: the cradle greeting

The tool is a Click-based CLI application with shared error reporting
and exit codes.
"""

__all__ = ["exprc"]
