"""
sdkprune - keep a trimmed, up to date cache of Go SDKs.

Keeps the newest release of every Go minor line from a configurable floor
upward plus gotip, removes every other SDK and launcher, and reinstalls the
kept versions through golang.org/dl.
"""

__version__ = "0.1.0"
