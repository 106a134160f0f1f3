"""Provider clients for Soundshelf.

Two read-only services are used: the Deezer metadata API for artists and
albums, and the Deezer track API behind RapidAPI for playable track objects.
"""

from soundshelf.providers import deezer, rapidapi

__all__ = ["deezer", "rapidapi"]
