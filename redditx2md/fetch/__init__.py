"""
Reddit listing retrieval.

This package handles HTTP fetching and parsing of subreddit listings.
"""

from .reddit import fetch_top_posts, parse_listing

__all__ = [
    "fetch_top_posts",
    "parse_listing",
]
