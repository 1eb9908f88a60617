"""MenuController: Manages menu creation and action connections."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMainWindow, QMenuBar


class MenuController:
    """Manages main window menu creation and action connections."""

    def __init__(self, main_window: QMainWindow) -> None:
        """Initialize with main window reference.

        Args:
            main_window: The QMainWindow to create menus for
        """
        self.window = main_window
        self.actions: dict[str, QAction] = {}

    def setup_menus(self) -> dict[str, QAction]:
        """Create all menus and return action references.

        Returns:
            Dictionary mapping action names to QAction instances
        """
        menubar = QMenuBar(self.window)

        # File Menu
        file_menu = menubar.addMenu("File")
        self.actions["open_folder"] = file_menu.addAction("Open Folder…")
        self.actions["open_folder"].setShortcut(QKeySequence.StandardKey.Open)
        file_menu.addSeparator()
        self.actions["exit"] = file_menu.addAction("Exit")

        # Playback Menu
        playback_menu = menubar.addMenu("Playback")
        self.actions["toggle_playback"] = playback_menu.addAction("Pause")
        self.actions["toggle_playback"].setShortcut(QKeySequence("Space"))
        self.actions["next_image"] = playback_menu.addAction("Next Image")
        self.actions["next_image"].setShortcut(QKeySequence("Right"))

        # Log Menu
        log_menu = menubar.addMenu("Log")
        self.actions["open_latest_log"] = log_menu.addAction("Open Latest Log")
        log_menu.addSeparator()
        self.actions["open_log_directory"] = log_menu.addAction("Open Log Directory")

        self.window.setMenuBar(menubar)
        return self.actions

    def connect_actions(self, handlers: dict[str, Callable]) -> None:
        """Connect menu actions to their handler methods.

        Unknown names are ignored; "exit" falls back to closing the window.

        Args:
            handlers: Dictionary mapping action names to handler callables
        """
        for name, action in self.actions.items():
            if name in handlers:
                action.triggered.connect(handlers[name])
        if "exit" not in handlers:
            self.actions["exit"].triggered.connect(self.window.close)

    def set_playing(self, playing: bool) -> None:
        """Update the playback toggle label."""
        action = self.actions.get("toggle_playback")
        if action:
            action.setText("Pause" if playing else "Resume")

    def enable_action(self, name: str, enabled: bool = True) -> None:
        """Enable or disable a specific action.

        Args:
            name: Action name
            enabled: Whether to enable the action
        """
        action = self.actions.get(name)
        if action:
            action.setEnabled(enabled)
