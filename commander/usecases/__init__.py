"""Use-case layer for node control operations.

Each module coordinates domain objects and ports without spawning processes or
touching files directly, preserving the hexagonal boundaries.
"""
