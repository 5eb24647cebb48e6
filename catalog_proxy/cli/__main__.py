"""Allow ``python -m catalog_proxy.cli`` execution."""

import sys

from catalog_proxy.cli.catalog import main

sys.exit(main())
