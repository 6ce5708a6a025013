"""
EstateCRM - lead lifecycle and assignment engine.
"""
__version__ = "1.0.0"
