# This project was developed with assistance from AI tools.
"""Administrative console API for the microloan platform."""

__version__ = "0.1.0"
