"""Run the migrator as ``python -m packer_sdk_migrator``."""
import sys

from .cli import main

sys.exit(main())
