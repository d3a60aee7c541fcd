"""
HN Brief engine: Hacker News client, fragment renderer, summarizers.
"""
