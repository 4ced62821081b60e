"""
Data models for TweetStats.
"""
