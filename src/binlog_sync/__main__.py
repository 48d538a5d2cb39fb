"""Allow running as ``python -m binlog_sync``."""

import sys

from binlog_sync.adapters.inbound.cli import main

if __name__ == "__main__":
    sys.exit(main())
