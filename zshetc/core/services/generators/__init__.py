"""
Generators — produce the zsh startup files from resolved options.

Each generator function returns a ``GeneratedFile``; ``assemble()``
returns all of them keyed by logical name.
"""
