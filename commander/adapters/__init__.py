"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (child processes, the
    node config file, data-folder storage, and host diagnostics) used by use
    cases.

Dependencies:
    Individual submodules depend on ``subprocess``, ``socket``, filesystem
    APIs, and domain protocol definitions.

Call context:
    Imported by ``commander.app.controller`` (for runtime wiring) and by tests
    (for process- and filesystem-level behavior verification).
"""
