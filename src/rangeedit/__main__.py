"""Allow ``python -m rangeedit``."""

from .cli import main

raise SystemExit(main())
