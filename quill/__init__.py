"""Quill - a small multi-user blogging backend."""

__version__ = "0.1.0"
