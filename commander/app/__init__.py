"""Application composition layer for the node control service.

The controller in this package wires settings, adapters, and use cases once;
``main`` serves them through the ``rest_api`` command surface.
"""
