"""Allow running as ``python -m bazel_mcp``."""

import sys

from bazel_mcp.cli import main

sys.exit(main())
