"""
TweetVerse backend: parsing and aggregation of sentiment-annotated posts.
"""
