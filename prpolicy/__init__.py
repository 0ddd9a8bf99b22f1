"""Built-in functions and actions for checking and enforcing pull request policies on GitHub."""

__version__ = "0.1.0"