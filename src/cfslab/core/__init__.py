"""
CFSlab Core

Configuration, shared types, exceptions and logging setup.
"""
