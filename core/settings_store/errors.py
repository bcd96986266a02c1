"""
Pixie Settings - Errors
=======================
"""


class SettingsPermissionError(PermissionError):
    """
    Raised when a setting is written after installation by an actor
    without the admin permission. Nothing has been written when raised.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(
            f"Setting '{key}' can only be changed by an administrator "
            f"once the application is installed."
        )


class SettingsBackendUnavailable(Exception):
    """
    Raised by a settings repository when its table cannot be read,
    typically before the schema has been migrated.
    """
