"""Configuration management."""
from .settings import *
from .vocabulary import Vocabulary, VocabularyLoader, get_vocabulary_loader

__all__ = ['Vocabulary', 'VocabularyLoader', 'get_vocabulary_loader']
