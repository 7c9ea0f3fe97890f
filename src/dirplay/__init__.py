"""dirplay: browse a directory tree and play audio files from the terminal."""

__version__ = "0.3.0"
