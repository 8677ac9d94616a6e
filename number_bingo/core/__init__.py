"""
Core modules (card generator, input parsing, PDF renderer, QR utilities).

Avoid importing heavy dependencies at package import time; import submodules directly:
- `number_bingo.core.generator`
- `number_bingo.core.parser`
- `number_bingo.core.pdf`
"""

__all__ = []
