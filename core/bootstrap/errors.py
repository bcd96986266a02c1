"""
Pixie Bootstrap - Installation Errors
=====================================
A failed installation step halts the sequence where it stands.
No retry. No rollback of the steps that already completed.
"""


class InstallationError(Exception):
    """
    Raised when an installation step cannot complete.

    If this exception is raised:
    - The run stays in its last completed state
    - Earlier steps are NOT undone
    - Restarting is the operator's decision
    """

    def __init__(self, step: str, detail: str):
        self.step = step
        self.detail = detail
        super().__init__(f"INSTALLATION FAILURE - {step}: {detail}")


class InstallationStateError(InstallationError):
    """Raised when a step is invoked out of the linear order."""
