"""
Handlers for name-tagged custom metadata formats.
"""
