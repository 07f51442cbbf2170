"""Gentoo installer (Python-first, fail-fast).

Core design goals:
- Declarative install profile, loaded once and immutable
- Strictly ordered steps; the first failure aborts the run
- Commands run as argument vectors, never through a shell
- Centralized logging
"""

__all__ = []
