"""UI package for the evalo terminal front-end.

All UI components are built on the Textual framework. The command palette
lives in `evalo.ui.command_palette`; `evalo.ui.app` hosts it.
"""
