"""
Interactive terminal browser for one day of threads.

The main screen lists the threads a page at a time followed by the daily
statistics. Entering a thread number opens its detail screen.
"""

import logging
from collections.abc import Sequence
from datetime import date

import click

from ..core.models import DailyStats, Thread
from .formatting import history_title, render_daily_stats, render_header, render_thread_detail, render_thread_summary

logger = logging.getLogger(__name__)

BACK = "back"
QUIT = "quit"


class HistoryBrowser:
    """Menu loop over the threads of one day."""

    def __init__(
        self,
        threads: Sequence[Thread],
        stats: DailyStats,
        target_date: date,
        page_size: int = 15,
        preview_length: int = 60,
    ):
        self.threads = list(threads)
        self.stats = stats
        self.target_date = target_date
        self.page_size = max(page_size, 1)
        self.preview_length = preview_length
        self.page = 0
        self.notice = ""

    @property
    def page_count(self) -> int:
        return max((len(self.threads) + self.page_size - 1) // self.page_size, 1)

    def render_main(self) -> list[str]:
        lines = render_header(history_title(self.target_date))

        if not self.threads:
            lines.append(click.style("No messages found for this day.", fg="yellow"))
        else:
            first = self.page * self.page_size
            for number, thread in enumerate(self.threads[first : first + self.page_size], first + 1):
                lines.extend(render_thread_summary(thread, number, self.preview_length))
            if self.page_count > 1:
                lines.append(click.style(f"Page {self.page + 1}/{self.page_count}", fg="bright_black"))
                lines.append("")

        lines.extend(render_daily_stats(self.stats))
        return lines

    def _show(self, lines: list[str]):
        click.clear()
        click.echo("\n".join(lines))
        if self.notice:
            click.echo(click.style(self.notice, fg="red"))
            self.notice = ""

    def run(self):
        """Run the main menu until the user quits."""
        while True:
            self._show(self.render_main())
            choice = click.prompt("Select a message number (n/p: page, q: quit)", type=str).strip().lower()

            if choice == "q":
                return
            if choice == "n":
                self._change_page(1)
                continue
            if choice == "p":
                self._change_page(-1)
                continue

            thread = self._thread_for(choice)
            if thread is None:
                self.notice = f"Invalid selection: {choice}"
                continue

            if self.show_detail(thread) == QUIT:
                return

    def show_detail(self, thread: Thread) -> str:
        """Show one thread until the user goes back (BACK) or exits (QUIT)."""
        while True:
            self._show(render_thread_detail(thread))
            choice = click.prompt("Select an option (b: back, q: exit)", type=str).strip().lower()

            if choice == "b":
                return BACK
            if choice == "q":
                return QUIT
            self.notice = f"Invalid selection: {choice}"

    def _change_page(self, step: int):
        page = self.page + step
        if 0 <= page < self.page_count:
            self.page = page
        else:
            self.notice = "No more pages."

    def _thread_for(self, choice: str) -> Thread | None:
        if not choice.isdigit():
            return None
        number = int(choice)
        if 1 <= number <= len(self.threads):
            logger.debug(f"Opening thread {number} ({self.threads[number - 1].root.id})")
            return self.threads[number - 1]
        return None
