"""
TF-IDF search module for ranking text files by cosine similarity to a free-text query.
"""
