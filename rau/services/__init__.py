"""
Services.

The schema cache, field classification, value encoding, command
resolution and response projection used by the CLI.
"""
