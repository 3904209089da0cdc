"""DocForge - XML documentation synthesis for C# sources.

Finds undocumented types, members, routines and properties in a parsed
source file and attaches template-driven documentation comments to them.
"""

__version__ = "0.4.0"
__all__ = ["__version__"]
