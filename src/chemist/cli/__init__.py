"""
Chemist Command-Line Interface
==============================

- **chemcc**: compile a C-subset file to assembly and assemble it

The tool is a Click application; see ``chemcc --help``.
"""

__all__ = ["chemcc"]
