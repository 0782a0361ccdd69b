# Copyright 2026 Cisco Systems, Inc.
# SPDX-License-Identifier: Apache-2.0

"""
Interactive review TUI.

Adapts the terminal-independent views in ``docscope.views`` to ``textual``:
each open view lives on its own screen, key presses are translated into
:class:`~docscope.views.keys.KeyEvent` values, and every handled key triggers
a full re-render of the view's frame.

Run via:  docscope report.docx
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.screen import Screen
from textual.widget import Widget

from ..core.exceptions import DocScopeError
from ..core.readers.archive_reader import ZipContainer
from ..core.readers.legacy_reader import read_legacy_blocks
from ..core.readers.pdf_reader import PdfDocument, scan_pdf_objects
from ..core.scan_policy import ScanPolicy
from ..core.scanner import FindingAggregator
from ..core.structural import StructuralChecker, format_report
from ..views import BaseView, DocumentPager, Frame, Key, KeyEvent, MatchBrowser, MemberList, MenuAction, TextViewer

logger = logging.getLogger(__name__)

# ─── Key translation ─────────────────────────────────────────────────────────

_KEY_MAP = {
    "up": Key.UP,
    "down": Key.DOWN,
    "left": Key.LEFT,
    "right": Key.RIGHT,
    "pageup": Key.PAGE_UP,
    "pagedown": Key.PAGE_DOWN,
    "escape": Key.ESCAPE,
    "enter": Key.ENTER,
    "backspace": Key.BACKSPACE,
    "ctrl+f": Key.FILTER_START,
    "ctrl+t": Key.TOGGLE_STRIP,
}


def translate_key(event: events.Key) -> KeyEvent | None:
    """Map a textual key event onto a view key, or ``None`` if views ignore it."""
    key = _KEY_MAP.get(event.key)
    if key is not None:
        return KeyEvent(key)
    if event.is_printable and event.character:
        return KeyEvent.printable(event.character)
    return None


def frame_to_text(frame: Frame, rows: int) -> Text:
    """Render a frame as title, *rows* body lines and a status line.

    The frame cursor is drawn as a reversed cell unless a reverse span already
    covers it. Lines are padded so a cursor past the end of a line stays visible.
    """
    text = Text(no_wrap=True, overflow="crop")
    text.append(frame.title, style="bold")
    for row in range(rows):
        text.append("\n")
        line = Text(frame.lines[row] if row < len(frame.lines) else "")
        spans = [(start, end) for span_row, start, end in frame.reverse_spans if span_row == row]
        if frame.cursor is not None and frame.cursor[0] == row:
            col = frame.cursor[1]
            if not any(start <= col < end for start, end in spans):
                spans.append((col, col + 1))
        for start, end in spans:
            if end > len(line):
                line.pad_right(end - len(line))
            line.stylize("reverse", start, end)
        text.append_text(line)
    text.append("\n")
    text.append(frame.status, style="reverse")
    return text


# ─── Widgets and screens ─────────────────────────────────────────────────────


class FrameView(Widget, can_focus=True):
    """Draws the current frame of a view."""

    DEFAULT_CSS = """
    FrameView {
        height: 1fr;
        width: 1fr;
    }
    """

    def __init__(self, view: BaseView) -> None:
        super().__init__()
        self.view = view

    def _body_rows(self) -> int:
        # title and status take one row each
        return max(1, self.size.height - 2)

    def on_resize(self, event: events.Resize) -> None:
        self.view.resize(max(1, event.size.height - 2), max(1, event.size.width))

    def render(self) -> Text:
        return frame_to_text(self.view.render(), self._body_rows())


class ViewScreen(Screen):
    """Runs one view until it closes, then pops itself."""

    def __init__(self, view: BaseView) -> None:
        super().__init__()
        self.view = view

    def compose(self) -> ComposeResult:
        yield FrameView(self.view)

    def on_mount(self) -> None:
        self.query_one(FrameView).focus()

    def on_key(self, event: events.Key) -> None:
        key_event = translate_key(event)
        if key_event is None:
            return
        event.stop()
        event.prevent_default()
        action = self.view.handle(key_event)
        if self.view.closed:
            self.on_view_closed()
            return
        if action is not None:
            self.on_view_action(action)
        self.query_one(FrameView).refresh()

    def on_view_action(self, action: MenuAction) -> None:
        """Hook for views that hand requests back to the session."""

    def on_view_closed(self) -> None:
        self.app.pop_screen()


class ContainerScreen(ViewScreen):
    """Root of a container session: member list, scan and structural report."""

    def __init__(self, container: ZipContainer, policy: ScanPolicy) -> None:
        super().__init__(MemberList(container.members, title=f"Container: {container.path.name}"))
        self.container = container
        self.policy = policy

    def on_view_action(self, action: MenuAction) -> None:
        if action is MenuAction.VIEW_MEMBER:
            self.open_member()
        elif action is MenuAction.SCAN:
            self.open_scan()
        elif action is MenuAction.REPORT:
            self.open_report()

    def on_view_closed(self) -> None:
        self.app.exit()

    def open_member(self) -> None:
        member = self.view.selected
        if member is None or member.is_dir:
            return
        try:
            data = self.container.read_member(member.name)
        except DocScopeError as e:
            logger.warning("Cannot open member %s: %s", member.name, e)
            self.app.notify(str(e), title="Cannot open member", severity="error")
            return
        viewer = TextViewer.from_bytes(data, title=member.name, max_lines=self.policy.limits.max_lines)
        self.app.push_screen(ViewScreen(viewer))

    def open_scan(self) -> None:
        result = FindingAggregator(policy=self.policy).scan_container(self.container)
        if result.skipped_members:
            self.app.notify(
                f"{len(result.skipped_members)} member(s) could not be read",
                title="Scan incomplete",
                severity="warning",
            )
        browser = MatchBrowser(
            result.findings,
            title=f"Suspicious tags in {self.container.path.name}",
            truncated=result.truncated,
        )
        self.app.push_screen(ViewScreen(browser))

    def open_report(self) -> None:
        findings = StructuralChecker(self.policy).check_container(self.container)
        lines = format_report(findings, f"Structural analysis of {self.container.path.name}")
        self.app.push_screen(ViewScreen(TextViewer(lines, title="Structural report")))


class PagerScreen(ViewScreen):
    """Root of a PDF or legacy document session."""

    def on_view_action(self, action: MenuAction) -> None:
        if action is MenuAction.REPORT and self.view.report_lines is not None:
            self.app.push_screen(ViewScreen(TextViewer(self.view.report_lines, title="Indicator report")))

    def on_view_closed(self) -> None:
        self.app.exit()


# ─── Main App ────────────────────────────────────────────────────────────────


class ReviewApp(App[None]):
    """Hosts one session root screen; exits when the root view closes."""

    TITLE = "docscope"

    def __init__(self, root: ViewScreen) -> None:
        super().__init__()
        self.root_screen = root

    def on_mount(self) -> None:
        self.push_screen(self.root_screen)


# ─── Entry points (called by CLI) ────────────────────────────────────────────


def build_pdf_pager(document: PdfDocument, policy: ScanPolicy) -> DocumentPager:
    """Extract every page and the indicator report of an open PDF."""
    pages = []
    for index in range(document.page_count):
        try:
            pages.append(document.page_text(index))
        except DocScopeError as e:
            logger.warning("Page %d of %s unreadable: %s", index + 1, document.path, e)
            pages.append(f"(page could not be read: {e})")
    report = format_report(scan_pdf_objects(document), f"PDF indicators in {document.path.name}")
    return DocumentPager(
        pages,
        title=f"PDF: {document.path.name}",
        page_label="Page",
        report_lines=report,
        max_lines=policy.limits.max_lines,
    )


def run_container_tui(path: str | Path, policy: ScanPolicy) -> int:
    """Run the member-list session for a zip-based container."""
    with ZipContainer.open(path) as container:
        ReviewApp(ContainerScreen(container, policy)).run()
    return 0


def run_pdf_tui(path: str | Path, policy: ScanPolicy) -> int:
    """Run the page viewer for a PDF document."""
    pager = build_pdf_pager(PdfDocument.open(path), policy)
    ReviewApp(PagerScreen(pager)).run()
    return 0


def run_legacy_tui(path: str | Path, policy: ScanPolicy) -> int:
    """Run the block viewer for a legacy binary document."""
    blocks = read_legacy_blocks(path, policy.limits.legacy_block_size)
    pager = DocumentPager(
        blocks,
        title=f"Document: {Path(path).name}",
        page_label="Block",
        max_lines=policy.limits.max_lines,
    )
    ReviewApp(PagerScreen(pager)).run()
    return 0
