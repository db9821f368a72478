"""Allow ``python -m stagefs``."""

from stagefs.cli import app

app()
