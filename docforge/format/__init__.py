"""
Natural-language formatting for generated documentation.

    from docforge.format import Formatter

    f = Formatter()
    f.format_method("GetSupportedKinds")   # 'Gets the supported kinds'
"""

from docforge.format.formatter import (
    Formatter,
    ReturnKind,
    classify_return_type,
)

__all__ = ["Formatter", "ReturnKind", "classify_return_type"]
