"""ShellPilot — natural-language requests to allow-listed shell commands."""

__version__ = "0.1.0"
