"""Vault query engine: sandboxing, scanning, search, ranking and link graphs.

Every operation takes the vault root directory and rebuilds whatever it needs
from the filesystem; nothing is cached between calls.
"""
