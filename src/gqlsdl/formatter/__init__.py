"""SDL formatter module.

Exports ``SdlFormatter``, ``FormatOptions`` and the ``format_document`` /
``format_entity`` convenience functions.
"""
from __future__ import annotations

from gqlsdl.formatter.formatter import FormatOptions, SdlFormatter, format_document, format_entity

__all__ = ["FormatOptions", "SdlFormatter", "format_document", "format_entity"]
