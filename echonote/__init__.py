"""
EchoNote - upload or record audio, transcribe it, and keep a personal history.
"""

__version__ = "0.1.0"
