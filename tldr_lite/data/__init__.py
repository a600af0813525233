"""
On-disk state of the viewer.

This package is responsible for:
* Loading and persisting settings.json (applying defaults where needed).
* Building the flat page index from the cache tree and querying it.
* Recording the outcome of the last update.
"""
