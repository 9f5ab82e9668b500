"""NetScraper API Package — search groups and search terms over HTTP.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
