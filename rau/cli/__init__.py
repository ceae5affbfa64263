"""
CLI Module.

Command-line front end for reading and writing Airtable records.

Architecture:
- The CLI is a thin presentation layer over rau.services
- The API is called via HTTP (httpx)
- Data goes to stdout, messages and logs to stderr

Usage:
    rau clients                          # create a blank record
    rau clients rec123                   # show every field of a record
    rau clients rec123 Name Status       # show selected fields
    rau clients rec123 Status=Active     # update fields
    rau clients --schema | --fields | --recent
    rau-tools shell clients              # interactive field entry
"""
