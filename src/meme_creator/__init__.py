"""Meme creator: caption template images and publish them asynchronously."""

__version__ = "0.1.0"
