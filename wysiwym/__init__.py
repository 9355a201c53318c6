"""Generic doc model and its conversion to and from the WYSIWYM editing surface."""

__version__ = "1.0.0"
