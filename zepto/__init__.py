"""A small curses text editor with nano-like and vim-like key bindings."""

__version__ = "0.1.0"