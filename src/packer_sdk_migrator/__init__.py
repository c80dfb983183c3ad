"""
Packer SDK Migrator

Checks whether a Packer plugin can move from Packer core to the Packer
plugin SDK, and rewrites its imports and go.mod to do so.
"""

__version__ = "0.1.0"
