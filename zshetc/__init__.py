"""
zsh-etc — declarative generation of the system-wide zsh startup files.
"""

__version__ = "0.1.0"
