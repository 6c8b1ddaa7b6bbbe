"""Entry point for `python -m kubeagent`.

Usage:
    python -m kubeagent
"""

from __future__ import annotations

import asyncio

from kubeagent.app import main

asyncio.run(main())
