"""
Top‑level package for the Agree/Disagree API.

This file makes ``agree_disagree_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``agree_disagree_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
