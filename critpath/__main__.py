"""Allow running as: python -m critpath"""
import sys

from .cli import main

sys.exit(main())
