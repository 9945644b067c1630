"""Dominant speaker identification from RFC 6464 audio levels.

The detector lives in ``dominant_speaker.detector``, configuration in
``dominant_speaker.config``.
"""

__version__ = "0.3.0"