"""
DocSearch - TF-IDF document search over a directory of text files.
"""
