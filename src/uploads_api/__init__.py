"""Uploads API: resumable uploads plus listing, download and delete of the resulting files."""
