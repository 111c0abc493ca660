"""
Top-level package for the outdoor site admin import client.

This package bundles the client-side workflows of the admin console:
bulk imports from WordPress and YouTube with live progress, bulk edits of
blog posts and videos, and transcript-to-blog conversion.  Modules are
split into subpackages:

* :mod:`src.client` – requests helpers for the admin REST backend
* :mod:`src.importers` – the import orchestrator and its progress state
* :mod:`src.mutators` – bulk category/status/delete edits of a selection
* :mod:`src.converters` – YouTube video to blog post conversion
* :mod:`src.utils` – logging, error reports, notifications and caching

Each layer has no direct knowledge of how it is driven; the command line
in ``main.py`` wires configuration and output together.
"""
