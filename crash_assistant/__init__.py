"""
Crash Assistant - symbolicate iOS/macOS crash logs with Xcode's symbolicatecrash.

Drop an .xcarchive, .xccrashpoint, .app, .dSYM or .crash; the assistant
infers the rest, runs symbolicatecrash and saves the result.
"""

__version__ = "1.0.0"
