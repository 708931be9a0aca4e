"""
Dialog Helper - Centralized message box utilities

Blocking notices shown for failed generations and other user-facing
problems.
"""

from PyQt6.QtWidgets import QWidget, QMessageBox


class DialogHelper:
    """Centralized dialog creation utilities"""

    @staticmethod
    def error(parent: QWidget, title: str, message: str) -> None:
        """
        Show error dialog.

        Args:
            parent: Parent widget
            title: Dialog title
            message: Error message
        """
        QMessageBox.critical(parent, title, message)


__all__ = ['DialogHelper']
