from .models import ParsedDoc
from .parse import DocumentParser

__all__ = ["DocumentParser", "ParsedDoc"]
