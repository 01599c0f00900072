"""
main.py

Stroke Markup - command line and preview host

Parses stroke markup such as ``ST2,#FF0000,DashStyle=Dash`` and prints the
descriptor as JSON.  Optionally renders a sample path with the resulting
pen into a PNG, or opens a small live-preview window.

Usage:
    python main.py "ST4,LG0 0:#FF1E88E5 1:#FFD81B60,LineJoin=Round"
    python main.py "ST2,#FF0000" --render out.png
    python main.py                      # preview window

Dependencies:
    pip install PyQt6 platformdirs tomli-w
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List, Optional

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import (
    QApplication,
    QLabel,
    QLineEdit,
    QMainWindow,
    QVBoxLayout,
    QWidget,
)

from canvas import FileResourceContext, StrokePreviewWidget, create_stroke, render_stroke_preview
from debug_trace import close_log, enable_trace, trace, trace_exception
from errors import ResourceLoadError, StrokeMarkupError
from markup import parse_stroke
from settings import ParserSettings, SettingsManager, get_settings
from utils import descriptor_to_dict

# Exit codes
EXIT_OK = 0
EXIT_MARKUP_ERROR = 2
EXIT_RESOURCE_ERROR = 3


class PreviewWindow(QMainWindow):
    """Live stroke preview: a markup line edit above the preview widget.

    Args:
        settings_manager: The SettingsManager instance for application settings.
        markup: Initial markup (defaults to the configured preview markup).
    """

    def __init__(self, settings_manager: SettingsManager, markup: Optional[str] = None):
        super().__init__()
        self.settings_manager = settings_manager
        self.setWindowTitle("Stroke Markup Preview")

        self.edit = QLineEdit(markup or settings_manager.settings.preview.markup)
        self.preview = StrokePreviewWidget()
        self.summary = QLabel()
        self.summary.setWordWrap(True)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.addWidget(self.edit)
        layout.addWidget(self.preview, 1)
        layout.addWidget(self.summary)
        self.setCentralWidget(central)

        # Debounced re-parse while typing
        self._parse_timer = QTimer(self)
        self._parse_timer.setSingleShot(True)
        self._parse_timer.setInterval(200)
        self._parse_timer.timeout.connect(self.apply_markup)
        self.edit.textChanged.connect(lambda _text: self._parse_timer.start())

        self.apply_markup()

    def apply_markup(self):
        """Parse the line edit's markup and update the preview and status bar."""
        markup = self.edit.text()
        options = self.settings_manager.settings.parser
        try:
            descriptor = parse_stroke(markup, options)
            stroke = create_stroke(descriptor, FileResourceContext.from_settings(self.settings_manager))
        except (StrokeMarkupError, ResourceLoadError) as e:
            trace(f"Preview failed: {e}", "MAIN")
            self.preview.set_stroke(None)
            self.summary.clear()
            self.statusBar().showMessage(str(e).splitlines()[0])
            return

        self.preview.set_stroke(stroke)
        self.summary.setText(json.dumps(descriptor_to_dict(descriptor)))
        defaults = descriptor.used_defaults()
        if defaults:
            self.statusBar().showMessage(f"Used defaults for: {', '.join(defaults)}")
        else:
            self.statusBar().showMessage(f"Parsed (validation count {descriptor.validation_count})")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Parse and preview stroke markup.")
    parser.add_argument("markup", nargs="?", help="stroke markup, e.g. ST2,#FF0000")
    parser.add_argument("--strict", action="store_true",
                        help="reject markup with characters the parse does not explain")
    parser.add_argument("--render", metavar="OUT.png",
                        help="render a sample path with the stroke into a PNG")
    parser.add_argument("--trace", action="store_true", help="enable debug tracing to stderr")
    parser.add_argument("--log-file", help="also write trace output to this file")
    return parser


def run_cli(args: argparse.Namespace, settings_manager: SettingsManager) -> int:
    """Parse ``args.markup``, print JSON and optionally render.

    Returns:
        Process exit code.
    """
    base = settings_manager.settings.parser
    options = ParserSettings(
        default_width=base.default_width,
        default_miter_limit=base.default_miter_limit,
        strict=base.strict or args.strict,
    )

    try:
        descriptor = parse_stroke(args.markup, options)
    except StrokeMarkupError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_MARKUP_ERROR

    print(json.dumps(descriptor_to_dict(descriptor), indent=2))

    if args.render:
        # Offscreen rendering needs a QGuiApplication but no display
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        app = QApplication.instance() or QApplication(sys.argv[:1])
        preview = settings_manager.settings.preview
        try:
            stroke = create_stroke(descriptor, FileResourceContext.from_settings(settings_manager))
        except ResourceLoadError as e:
            print(f"error: {e}", file=sys.stderr)
            return EXIT_RESOURCE_ERROR
        image = render_stroke_preview(stroke, preview.width, preview.height, preview.background)
        if not image.save(args.render):
            print(f"error: could not write {args.render}", file=sys.stderr)
            return EXIT_RESOURCE_ERROR
        trace(f"Rendered preview to {args.render} ({app.platformName()})", "MAIN")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point."""
    args = build_arg_parser().parse_args(argv)
    if args.trace or args.log_file:
        enable_trace(args.log_file)

    trace("Loading settings", "MAIN")
    settings_manager = get_settings()

    if args.markup is not None:
        try:
            return run_cli(args, settings_manager)
        finally:
            close_log()

    trace("Application starting", "MAIN")
    app = QApplication(sys.argv)
    settings_manager.ensure_file_complete()

    app.aboutToQuit.connect(close_log)

    w = PreviewWindow(settings_manager)
    w.resize(settings_manager.settings.preview.width + 80, settings_manager.settings.preview.height + 140)
    w.show()
    trace("Entering event loop", "MAIN")
    return app.exec()


if __name__ == "__main__":
    # Set up global exception handler to catch crashes
    def excepthook(exc_type, exc_value, exc_tb):
        import traceback
        trace("UNCAUGHT EXCEPTION:", "CRASH")
        trace("".join(traceback.format_exception(exc_type, exc_value, exc_tb)), "CRASH")
        close_log()
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = excepthook

    try:
        sys.exit(main())
    except Exception as e:
        trace(f"FATAL: {type(e).__name__}: {e}", "CRASH")
        trace_exception("Fatal exception")
        close_log()
        raise
