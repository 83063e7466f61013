"""Loader Module.

This package contains document loader components:
- Base loader class
- Plain-text fallback loader
- Extension-keyed loader registry
"""

from src.libs.loader.base_loader import BaseLoader
from src.libs.loader.loader_registry import LoaderRegistry, extension_of
from src.libs.loader.text_loader import PlainTextLoader

__all__ = [
	"BaseLoader",
	"PlainTextLoader",
	"LoaderRegistry",
	"extension_of",
]
