"""
Adapter layer for the Uploads API.

Binds the external resumable upload engine to the shared upload directory and
the naming resolver.
"""
