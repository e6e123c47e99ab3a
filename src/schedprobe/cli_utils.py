# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import sys
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.panel import Panel
from rich.text import Text


@contextmanager
def exit_on_error(
    title: str = "Error", console: Console | None = None, exit_code: int = 1
) -> Iterator[None]:
    """Print any exception raised inside the block in a red panel and exit.

    ``KeyboardInterrupt`` and ``SystemExit`` pass through untouched.
    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit):
        raise
    except Exception as e:
        console = console or Console(stderr=True)
        console.print(
            Panel(
                Text(f"{type(e).__name__}: {e}"),
                title=title,
                title_align="left",
                border_style="bold red",
            )
        )
        sys.exit(exit_code)
