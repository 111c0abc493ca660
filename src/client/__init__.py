"""
Admin REST API helpers.

This subpackage provides functions to call the admin backend: bulk imports,
transcript fetches, bulk edits and video conversion.  Errors surface as
:class:`src.client.admin_api.ApiError`; nothing is retried.
"""
