import sys

from mysql_readonly.entrypoints.mcp.cli import main

sys.exit(main())
