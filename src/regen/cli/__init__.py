"""Command-line interface for regen (``regen check``, ``regen cache ...``)."""
