"""Standalone command-line tools for the catalog proxy.

Run ``python -m catalog_proxy.cli --help`` for the available commands.
"""
