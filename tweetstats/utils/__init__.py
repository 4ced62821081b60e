"""
Utility modules for TweetStats.

Cross-cutting concerns:
- Text: tweet body and location cleaning
- Dates: Twitter timestamp parsing
- Storage: CSV report writing
"""
