"""ARCADE CLI -- scaffolds retro 2D C games built on the ARCADE library.

Quick usage::

    arcade init my-game          # demo project
    arcade init my-game --blank  # headers + empty main.c
"""

__version__ = "1.0.0"
