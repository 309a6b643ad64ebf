"""
Taxonomy app: authors, categories and tags referenced by articles.
"""
