"""
HN Brief command line.
"""
