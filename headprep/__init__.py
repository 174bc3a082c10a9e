"""Treebank preprocessing for head-driven statistical parsing (headprep).

Main components:

- A pipeline of tree transformations that turns treebank parses into
  training trees: tag normalization, pruning, base NP marking, null element
  removal, punctuation raising, argument identification and augmentation
  stripping.
- Head rules and argument contexts read from simple resource files.
- A word-feature encoder for unknown words.
"""
__version__ = '0.1.0'
