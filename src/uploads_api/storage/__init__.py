"""
Upload artifact lifecycle.

Naming of incoming uploads, classification of directory entries into user
files and upload engine bookkeeping, listing and deletion.
"""
