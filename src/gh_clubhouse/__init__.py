"""GitHub to Clubhouse importer

Imports the issues of a GitHub repository into a Clubhouse project as
stories, submitted in concurrent bulk batches.
"""

__version__ = '0.1.0'

from .cli import main

__all__ = ['main']
