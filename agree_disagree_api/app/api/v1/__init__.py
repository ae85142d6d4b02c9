"""
Version 1 of the management API.
"""
