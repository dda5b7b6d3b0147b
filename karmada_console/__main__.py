"""Entry point for `python -m karmada_console`.

Usage:
    python -m karmada_console
"""

from __future__ import annotations

import asyncio

from karmada_console.app import main

asyncio.run(main())
