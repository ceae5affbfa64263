"""
rau - read and write Airtable records from the command line.
"""

__version__ = "1.0.0"
