"""Top-level package for reportlint.

This package audits and rewrites citation, heading, and attribute markup in
Quarto/Markdown report corpora. The main library entry point is
`CitationNormalizer`.
"""

from .text.citations import CitationNormalizer

__all__ = ["CitationNormalizer", "__version__"]

__version__ = "0.1.0"
