"""
Infrastructure adapters for the news bounded context.

Each adapter implements the ArticleSource port.
"""
