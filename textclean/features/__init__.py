"""
Text cleaning stages.

This subpackage includes:
- string normalization (case, contractions, abbreviations, URLs, ...)
- tokenization strategies (word, n-gram, sentence, tweet)
- token filters and the chain that combines them
- stemming / lemmatization
- the pipeline that chains the stages together.
"""
